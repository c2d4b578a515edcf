"""Configuration for neo-rbac: settings, logging and shared constants."""

from .constants import (
    WILDCARD,
    ResourceKeys,
    ContextKeys,
    PrincipalKind,
    PermissionEffect,
    AuditLogLevel,
    AuditEventType,
    DefaultPermission,
    DecisionReason,
)
from .settings import RBACSettings, get_settings
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    # Constants
    "WILDCARD",
    "ResourceKeys",
    "ContextKeys",
    "PrincipalKind",
    "PermissionEffect",
    "AuditLogLevel",
    "AuditEventType",
    "DefaultPermission",
    "DecisionReason",

    # Settings
    "RBACSettings",
    "get_settings",

    # Logging
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
