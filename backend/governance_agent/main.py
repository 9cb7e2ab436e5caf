"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from governance_agent.api.v1.api import api_router
from governance_agent.core.config import get_settings
from governance_agent.core.logging import configure_logging, get_logger
from governance_agent.core.middleware import RequestContextMiddleware
from governance_agent.services.gateway import build_gateway
from governance_agent.workflow.controller import WorkflowController

settings = get_settings()
configure_logging(settings)
logger = get_logger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build collaborators and the controller, then run the startup load."""
    logger.info("application_startup", version=settings.app_version)

    gateway = build_gateway(settings)
    controller = WorkflowController(gateway, voter_identity=settings.voter_identity)
    app.state.gateway = gateway
    app.state.controller = controller

    proposals_outcome, stats_outcome = await controller.load_all()
    logger.info(
        "startup_load_finished",
        proposals=proposals_outcome.value,
        stats=stats_outcome.value,
    )

    yield

    logger.info("application_shutdown")
    await gateway.aclose()


# =============================================================================
# FastAPI Application
# =============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.app_version}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "detail": str(exc)},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "governance_agent.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
