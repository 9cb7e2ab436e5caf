"""Core module for configuration, logging and errors."""
from governance_agent.core.config import Settings, get_settings
from governance_agent.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
