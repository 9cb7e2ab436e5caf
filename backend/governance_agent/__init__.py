"""DAO governance agent: proposal/voting state and its asynchronous workflow."""

__version__ = "1.0.0"
