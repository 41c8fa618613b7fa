"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from src.infrastructure.logging.logger import get_app_logger


SUPPORTED_BACKENDS = ("sqlalchemy", "memory")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for wiring the ledger engine.

    Attributes:
        backend: Storage backend identifier (sqlalchemy or memory).
        strict_membership: Fail when records reference members outside the
            group instead of keeping their balance.
        balance_cache: Cache computed balances until the next write. Off by
            default: expense writers outside this package must call
            ``BalanceCachePort.invalidate`` before it can be enabled.
    """

    backend: str = "sqlalchemy"
    strict_membership: bool = False
    balance_cache: bool = False

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unsupported LEDGER_BACKEND '{backend}', using sqlalchemy"
            )
            backend = "sqlalchemy"
        return cls(
            backend=backend,
            strict_membership=cls._read_flag(
                "LEDGER_STRICT_MEMBERSHIP", False, logger
            ),
            balance_cache=cls._read_flag("LEDGER_BALANCE_CACHE", False, logger),
        )

    @staticmethod
    def _read_flag(name: str, default: bool, logger) -> bool:
        """Read a boolean environment variable.

        Args:
            name: Name of the environment variable.
            default: Value used when the variable is unset or invalid.
            logger: Logger used for warnings.

        Returns:
            bool: Parsed flag value.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        cleaned = raw.strip().lower()
        if cleaned in _TRUE_VALUES:
            return True
        if cleaned in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean for {name}: '{raw}'")
        return default


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
