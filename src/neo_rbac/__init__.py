"""Neo-RBAC - embedded role and resource based access control for NeoMultiTenant services.

The engine evaluates role hierarchies, nested groups, resource-scoped grants,
explicit denials and runtime conditions in-process, and publishes an audit
stream of every check and policy change.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    WILDCARD,
    AuditEventType,
    AuditLogLevel,
    DefaultPermission,
    PermissionEffect,
    PrincipalKind,
    RBACSettings,
    get_settings,
)

from .core.exceptions import (
    RBACError,
    ConfigurationError,
    ValidationError,
    InvalidConditionError,
    AuthorizationError,
    PrincipalNotFoundError,
    GroupNotFoundError,
    create_error_response,
)

from .features.audit import AuditEmitter, AuditEvent, AuditLogEntry, AuditSink, LoggingAuditSink
from .features.conditions import (
    Condition,
    ConditionKind,
    IPAllowListCondition,
    IPFilterCondition,
    TimeWindowCondition,
    check_conditions,
    evaluate_condition,
)
from .features.permissions import Permission, Resource, ResourceId, permission_matches, resource_key
from .features.principals import Group, Principal, Service, User
from .features.roles import DEFAULT_ROLES, RoleDefinition, RoleRegistry, create_default_registry
from .features.rbac import RBAC, build_counters_rbac, can_do

__all__ = [
    "__version__",

    # Configuration
    "WILDCARD",
    "AuditEventType",
    "AuditLogLevel",
    "DefaultPermission",
    "PermissionEffect",
    "PrincipalKind",
    "RBACSettings",
    "get_settings",

    # Exceptions
    "RBACError",
    "ConfigurationError",
    "ValidationError",
    "InvalidConditionError",
    "AuthorizationError",
    "PrincipalNotFoundError",
    "GroupNotFoundError",
    "create_error_response",

    # Audit
    "AuditEmitter",
    "AuditEvent",
    "AuditLogEntry",
    "AuditSink",
    "LoggingAuditSink",

    # Conditions
    "Condition",
    "ConditionKind",
    "IPAllowListCondition",
    "IPFilterCondition",
    "TimeWindowCondition",
    "check_conditions",
    "evaluate_condition",

    # Permissions
    "Permission",
    "Resource",
    "ResourceId",
    "permission_matches",
    "resource_key",

    # Principals
    "Group",
    "Principal",
    "Service",
    "User",

    # Roles
    "DEFAULT_ROLES",
    "RoleDefinition",
    "RoleRegistry",
    "create_default_registry",

    # Engine
    "RBAC",
    "build_counters_rbac",
    "can_do",
]
