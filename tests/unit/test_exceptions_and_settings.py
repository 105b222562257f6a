"""
Unit tests for the error taxonomy and settings validation.
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from investnet.config.settings import Settings
from investnet.utils.exceptions import (
    CapacityError,
    IntegrityViolation,
    InvestnetError,
    NotFoundError,
    PermissionDeniedError,
    StateConflictError,
    ValidationError,
    is_user_actionable,
    needs_refresh,
)


class TestErrorTaxonomy:
    """Test error codes and handling categories."""

    @pytest.mark.parametrize(
        "error_cls,code",
        [
            (ValidationError, "VALIDATION_ERROR"),
            (StateConflictError, "STATE_CONFLICT"),
            (CapacityError, "CAPACITY_EXCEEDED"),
            (IntegrityViolation, "INTEGRITY_VIOLATION"),
            (NotFoundError, "NOT_FOUND"),
            (PermissionDeniedError, "PERMISSION_DENIED"),
        ],
    )
    def test_default_codes(self, error_cls, code):
        error = error_cls("boom")
        assert isinstance(error, InvestnetError)
        assert error.code == code
        assert error.message == "boom"
        assert str(error) == "boom"

    def test_code_override(self):
        assert ValidationError("bad", "INVALID_AMOUNT").code == "INVALID_AMOUNT"

    def test_actionable_errors(self):
        assert is_user_actionable(ValidationError("x"))
        assert is_user_actionable(CapacityError("x"))
        assert not is_user_actionable(StateConflictError("x"))

    def test_refresh_errors(self):
        assert needs_refresh(StateConflictError("x"))
        assert needs_refresh(IntegrityViolation("x"))
        assert not needs_refresh(ValidationError("x"))


class TestSettings:
    """Test settings validators."""

    def test_postgres_url_normalized(self):
        settings = Settings(database_url="postgres://u:p@db/ledger")
        assert settings.database_url == "postgresql+asyncpg://u:p@db/ledger"
        assert settings.is_sqlite is False

    def test_postgresql_url_normalized(self):
        settings = Settings(database_url="postgresql://u:p@db/ledger")
        assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_sync_driver_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(database_url="mysql://u:p@db/ledger")

    def test_log_level_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(SettingsValidationError):
            Settings(log_level="loud")

    def test_debug_forbidden_in_production(self):
        with pytest.raises(SettingsValidationError):
            Settings(environment="production", debug=True)
