"""
Configuration for the neo-rbac engine.

Settings are read from the environment (prefix ``RBAC_``) or a local
``.env`` file and are used to build preconfigured engine instances.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AuditLogLevel


class RBACSettings(BaseSettings):
    """Engine settings that can be overridden per service."""

    model_config = SettingsConfigDict(
        env_prefix="RBAC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Audit
    audit_log_level: AuditLogLevel = Field(default=AuditLogLevel.NONE)

    # Bootstrap
    seed_default_roles: bool = Field(default=True)

    # Request integration
    anonymous_principal_id: str = Field(default="anonymous")
    principal_header: str = Field(default="X-Principal-Id")

    def is_auditing(self) -> bool:
        """Check whether permission checks are published at all."""
        return self.audit_log_level != AuditLogLevel.NONE


@lru_cache()
def get_settings() -> RBACSettings:
    """Get cached settings instance."""
    return RBACSettings()
