"""Ledger collaborators."""
from governance_agent.services.ledger.base import Advisor, GovernanceBackend, LedgerBackend
from governance_agent.services.ledger.http_client import HttpLedgerClient
from governance_agent.services.ledger.memory import InMemoryLedger

__all__ = [
    "Advisor",
    "GovernanceBackend",
    "LedgerBackend",
    "HttpLedgerClient",
    "InMemoryLedger",
]
