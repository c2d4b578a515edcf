"""Constants and enums for neo-rbac.

This module defines the constants, enums, and seed values that are used
throughout the access control engine.
"""

from enum import Enum
from typing import Final


WILDCARD: Final[str] = "*"


class ResourceKeys:
    """Canonical resource key format."""

    PREFIX: Final[str] = "rid"
    PATTERN: Final[str] = "rid:{tenant_id}:{subscription_id}:{namespace_id}:{resource_type_id}:{resource_id}"


class ContextKeys:
    """Request context keys understood by the built-in conditions."""

    CURRENT_TIME: Final[str] = "currentTime"
    CURRENT_TIME_ALIAS: Final[str] = "current_time"
    IP: Final[str] = "ip"


class PrincipalKind(str, Enum):
    """Kinds of principal that can hold roles."""

    USER = "user"
    SERVICE = "service"
    GROUP = "group"


class PermissionEffect(str, Enum):
    """Declared effect of a permission grant."""

    ALLOW = "allow"
    DENY = "deny"


class AuditLogLevel(str, Enum):
    """How much of each permission check is published on the audit stream."""

    NONE = "none"
    BASIC = "basic"
    DETAILED = "detailed"


class AuditEventType(str, Enum):
    """Audit stream event names."""

    PERMISSION_CHECK = "permissionCheck"
    ROLE_ASSIGNMENT = "roleAssignment"
    ROLE_REVOCATION = "roleRevocation"
    RESOURCE_PERMISSION_ASSIGNMENT = "resourcePermissionAssignment"
    PRINCIPAL_ADDITION = "principalAddition"
    PRINCIPAL_REMOVAL = "principalRemoval"
    ROLE_CREATION = "roleCreation"
    ROLE_REMOVAL = "roleRemoval"
    GROUP_CREATION = "groupCreation"
    GROUP_ADDITION = "groupAddition"
    GROUP_REMOVAL = "groupRemoval"
    PERMISSION_DENIAL = "permissionDenial"
    PERMISSION_DENIAL_REMOVAL = "permissionDenialRemoval"
    CONDITION_ADDITION = "conditionAddition"


class DefaultPermission:
    """Action names used by the default role seed."""

    READ: Final[str] = "read"
    WRITE: Final[str] = "write"
    DELETE: Final[str] = "delete"
    MANAGE: Final[str] = "manage"
    ADMIN: Final[str] = "admin"


class DecisionReason:
    """Reasons attached to permission check audit entries."""

    EXPLICITLY_DENIED: Final[str] = "Explicitly denied"
    GRANTED: Final[str] = "Permission granted"
    NOT_FOUND: Final[str] = "Permission not found"
    ERROR: Final[str] = "Permission check failed"
