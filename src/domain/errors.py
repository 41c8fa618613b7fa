"""Error taxonomy for the ledger engine."""


class LedgerError(Exception):
    """Base class for every error raised by the ledger engine."""


class ValidationError(LedgerError, ValueError):
    """Malformed input handed to a domain function or use case."""


class DependencyError(LedgerError, RuntimeError):
    """A data provider failed or returned inconsistent data."""


class PersistenceError(LedgerError, RuntimeError):
    """A write to the settlement store failed."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "DependencyError",
    "PersistenceError",
]
