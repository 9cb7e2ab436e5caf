"""API v1 router aggregation."""
from fastapi import APIRouter

from governance_agent import __version__
from governance_agent.api.v1.endpoints import draft, insights, proposals, state

api_router = APIRouter()

api_router.include_router(state.router, prefix="/state", tags=["state"])
api_router.include_router(proposals.router, prefix="/proposals", tags=["proposals"])
api_router.include_router(draft.router, prefix="/draft", tags=["draft"])
api_router.include_router(insights.router, tags=["insights"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
