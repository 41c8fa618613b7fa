"""Tests for infrastructure settings."""

from unittest.mock import MagicMock

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings


def _quiet(monkeypatch) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: logger)
    return logger


def test_from_env_defaults(monkeypatch) -> None:
    _quiet(monkeypatch)
    for name in (
        "LEDGER_BACKEND",
        "LEDGER_STRICT_MEMBERSHIP",
        "LEDGER_BALANCE_CACHE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings()
    assert settings.balance_cache is False


def test_from_env_reads_flags(monkeypatch) -> None:
    _quiet(monkeypatch)
    monkeypatch.setenv("LEDGER_BACKEND", " Memory ")
    monkeypatch.setenv("LEDGER_STRICT_MEMBERSHIP", "yes")
    monkeypatch.setenv("LEDGER_BALANCE_CACHE", "0")

    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings(
        backend="memory",
        strict_membership=True,
        balance_cache=False,
    )


def test_from_env_warns_on_invalid_values(monkeypatch) -> None:
    logger = _quiet(monkeypatch)
    monkeypatch.setenv("LEDGER_BACKEND", "mongo")
    monkeypatch.setenv("LEDGER_STRICT_MEMBERSHIP", "maybe")
    monkeypatch.delenv("LEDGER_BALANCE_CACHE", raising=False)

    settings = LedgerSettings.from_env()

    assert settings.backend == "sqlalchemy"
    assert settings.strict_membership is False
    assert logger.warning.call_count == 2
