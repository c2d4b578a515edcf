"""Tests for environment-driven configuration."""

import pytest

from neo_rbac import RBAC, AuditLogLevel, RBACSettings
from neo_rbac.config.constants import AuditEventType


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate settings from the host environment and any local .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("RBAC_AUDIT_LOG_LEVEL", "RBAC_SEED_DEFAULT_ROLES", "RBAC_PRINCIPAL_HEADER"):
        monkeypatch.delenv(name, raising=False)


class TestRBACSettings:
    """Test cases for RBACSettings."""

    def test_defaults(self):
        settings = RBACSettings()

        assert settings.audit_log_level is AuditLogLevel.NONE
        assert settings.seed_default_roles is True
        assert settings.anonymous_principal_id == "anonymous"
        assert settings.principal_header == "X-Principal-Id"
        assert settings.is_auditing() is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("RBAC_AUDIT_LOG_LEVEL", "detailed")
        monkeypatch.setenv("RBAC_SEED_DEFAULT_ROLES", "false")
        monkeypatch.setenv("RBAC_PRINCIPAL_HEADER", "X-User")

        settings = RBACSettings()

        assert settings.audit_log_level is AuditLogLevel.DETAILED
        assert settings.seed_default_roles is False
        assert settings.principal_header == "X-User"
        assert settings.is_auditing() is True

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("RBAC_AUDIT_LOG_LEVEL=basic\n")

        assert RBACSettings().audit_log_level is AuditLogLevel.BASIC

    def test_invalid_level_is_rejected(self, monkeypatch):
        monkeypatch.setenv("RBAC_AUDIT_LOG_LEVEL", "verbose")

        with pytest.raises(Exception):
            RBACSettings()


class TestFromSettings:
    """Test cases for building engines from settings."""

    def test_seeded_engine(self, recorder, request_for, counter_resource):
        rbac = RBAC.from_settings(RBACSettings(audit_log_level="basic"), audit_sinks=[recorder])

        assert rbac.log_level is AuditLogLevel.BASIC
        assert rbac.get_role("viewer") is not None

        rbac.has_permission("u1", request_for("read"), counter_resource)
        assert len(recorder.of_type(AuditEventType.PERMISSION_CHECK)) == 1

    def test_unseeded_engine(self):
        rbac = RBAC.from_settings(RBACSettings(seed_default_roles=False))

        assert rbac.get_role("viewer") is None
        assert rbac.log_level is AuditLogLevel.NONE
