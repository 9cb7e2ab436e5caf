"""Workflow controller."""
from governance_agent.workflow.controller import WorkflowController

__all__ = ["WorkflowController"]
