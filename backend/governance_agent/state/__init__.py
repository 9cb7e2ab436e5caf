"""Domain/state layer."""
from governance_agent.state.store import GovernanceState

__all__ = ["GovernanceState"]
