"""External collaborators: ledger and AI advisor."""
