"""Policy engine: the RBAC facade evaluated on every request.

Composes the role registry, principal directory, resource grant table,
negative permission table, conditions and audit emitter behind
``has_permission``:

1. a matching explicit denial rejects the request,
2. otherwise any effective role grant that matches (and whose conditions hold)
   allows it,
3. otherwise a matching resource-specific grant allows it,
4. the outcome is published on the audit stream unless auditing is off.

All tables live in memory and belong to one engine instance. Every public
operation runs under the instance's re-entrant lock.
"""

import logging
import threading
from collections import defaultdict
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple, Union

from ....config.constants import AuditLogLevel, DecisionReason
from ....config.settings import RBACSettings, get_settings
from ....core.exceptions import ConfigurationError
from ...audit.entities import AuditLogEntry
from ...audit.services import AuditEmitter, AuditSink
from ...conditions.entities import Condition
from ...conditions.services import check_conditions
from ...permissions.entities import Permission, Resource, ResourceId, permission_matches
from ...permissions.repositories import NegativePermissionTable, ResourceGrantTable
from ...principals.entities import Group, Principal, User
from ...principals.repositories import PrincipalDirectory
from ...roles.defaults import seed_default_roles
from ...roles.entities import RoleDefinition
from ...roles.repositories import RoleRegistry

logger = logging.getLogger(__name__)

Context = Optional[Mapping[str, Any]]


def _audit_log_level(value: Union[AuditLogLevel, str]) -> AuditLogLevel:
    try:
        return AuditLogLevel(value)
    except ValueError:
        raise ConfigurationError(
            f"Invalid audit log level: {value!r}",
            details={"allowed": [level.value for level in AuditLogLevel]}
        ) from None


class RBAC:
    """Role-based access control with negative, conditional and resource-scoped grants."""

    def __init__(
        self,
        log_level: Union[AuditLogLevel, str] = AuditLogLevel.NONE,
        audit_sinks: Optional[Iterable[AuditSink]] = None
    ):
        """
        Initialize an empty engine.

        Args:
            log_level: How much of each permission check is published
            audit_sinks: Sinks that receive every audit record
        """
        self._lock = threading.RLock()
        self._log_level = _audit_log_level(log_level)

        self.audit_emitter = AuditEmitter(audit_sinks)
        self._roles = RoleRegistry(self.audit_emitter)
        self._principals = PrincipalDirectory(self.audit_emitter)
        self._resource_grants = ResourceGrantTable(self.audit_emitter)
        self._negative_permissions = NegativePermissionTable(self.audit_emitter)
        self._principal_conditions: Dict[str, List[Tuple[Permission, Condition]]] = defaultdict(list)

    @classmethod
    def with_default_roles(cls, **kwargs) -> "RBAC":
        """Create an engine seeded with the default roles."""
        rbac = cls(**kwargs)
        with rbac._lock:
            seed_default_roles(rbac._roles)
        return rbac

    @classmethod
    def from_settings(
        cls,
        settings: Optional[RBACSettings] = None,
        audit_sinks: Optional[Iterable[AuditSink]] = None
    ) -> "RBAC":
        """Create an engine configured from ``RBACSettings``."""
        settings = settings or get_settings()
        kwargs = {"log_level": settings.audit_log_level, "audit_sinks": audit_sinks}
        if settings.seed_default_roles:
            return cls.with_default_roles(**kwargs)
        return cls(**kwargs)

    # Options

    @property
    def log_level(self) -> AuditLogLevel:
        return self._log_level

    def set_options(self, log_level: Optional[Union[AuditLogLevel, str]] = None) -> None:
        """Update engine options; omitted options are left unchanged."""
        with self._lock:
            if log_level is not None:
                self._log_level = _audit_log_level(log_level)

    # Roles

    def add_role(
        self,
        role: str,
        permissions: Iterable[Permission],
        inherits: Optional[Iterable[str]] = None
    ) -> RoleDefinition:
        with self._lock:
            return self._roles.add_role(role, permissions, inherits)

    def remove_role(self, role: str) -> bool:
        with self._lock:
            return self._roles.remove_role(role)

    def get_role(self, role: str) -> Optional[RoleDefinition]:
        with self._lock:
            return self._roles.get_role(role)

    def get_role_permissions(self, role: str) -> FrozenSet[Permission]:
        with self._lock:
            return self._roles.get_role_permissions(role)

    def assign_role(self, principal_id: str, role: str) -> None:
        """Assign ``role`` directly to an existing principal."""
        with self._lock:
            self._principals.require_principal(principal_id)
            self._roles.assign(principal_id, role)

    def revoke_role(self, principal_id: str, role: str) -> bool:
        with self._lock:
            return self._roles.revoke(principal_id, role)

    def get_principal_roles(self, principal_id: str) -> Set[str]:
        """Effective roles: direct roles plus the roles of every group above the principal.

        Each contributing role is expanded with its inheritance ancestors. For a
        group principal the groups above it are the groups that hold it as a
        subgroup.
        """
        with self._lock:
            roles = self._roles.resolve_role_names(self._roles.assigned_roles(principal_id))
            for group in self._principals.get_groups_member_of(principal_id):
                for role in self._roles.assigned_roles(group.id):
                    self._roles.add_role_and_ancestors(role, roles)
            return roles

    # Principals and groups

    def add_principal(self, principal: Principal) -> None:
        with self._lock:
            self._principals.add_principal(principal)

    def remove_principal(self, principal_id: str) -> bool:
        with self._lock:
            return self._principals.remove_principal(principal_id)

    def get_principal(self, principal_id: str) -> Optional[Principal]:
        with self._lock:
            return self._principals.get_principal(principal_id)

    def get_user(self, principal_id: str) -> Optional[User]:
        with self._lock:
            return self._principals.get_user(principal_id)

    def create_group(self, group_id: str, name: str) -> Group:
        with self._lock:
            return self._principals.create_group(group_id, name)

    def add_to_group(self, group_id: str, principal_id: str) -> None:
        with self._lock:
            self._principals.add_to_group(group_id, principal_id)

    def add_subgroup(self, parent_group_id: str, child_group_id: str) -> None:
        with self._lock:
            self._principals.add_subgroup(parent_group_id, child_group_id)

    def remove_from_group(self, group_id: str, principal_id: str) -> bool:
        with self._lock:
            return self._principals.remove_from_group(group_id, principal_id)

    def get_groups_member_of(self, principal_id: str) -> List[Group]:
        with self._lock:
            return self._principals.get_groups_member_of(principal_id)

    # Grants, denials and conditions

    def assign_resource_permission(
        self,
        resource: Union[ResourceId, Resource],
        role: str,
        permission: Permission
    ) -> None:
        with self._lock:
            self._resource_grants.assign_resource_permission(resource, role, permission)

    def deny_permission(self, principal_id: str, permission: Permission) -> None:
        """Explicitly deny ``permission`` to an existing principal."""
        with self._lock:
            self._principals.require_principal(principal_id)
            self._negative_permissions.deny_permission(principal_id, permission)

    def remove_denied_permission(self, principal_id: str, permission: Permission) -> bool:
        with self._lock:
            return self._negative_permissions.remove_denied_permission(principal_id, permission)

    def add_condition_checker(self, principal_id: str, permission: Permission, condition: Condition) -> None:
        """Require ``condition`` whenever ``principal_id`` is allowed something matching ``permission``."""
        with self._lock:
            self._principal_conditions[principal_id].append((permission, condition))
            self.audit_emitter.emit_condition_addition(principal_id, permission, condition.kind.value)

    # Decision

    def has_permission(
        self,
        principal_id: str,
        permission: Permission,
        resource_id: ResourceId,
        context: Context = None
    ) -> bool:
        """Check whether ``principal_id`` may perform ``permission`` on ``resource_id``.

        Never raises: missing data, and any failure while evaluating, deny.
        """
        try:
            with self._lock:
                if self._negative_permissions.is_denied(principal_id, permission):
                    granted, reason = False, DecisionReason.EXPLICITLY_DENIED
                else:
                    granted = self.check_permissions(principal_id, permission, resource_id, context)
                    reason = DecisionReason.GRANTED if granted else DecisionReason.NOT_FOUND
                log_level = self._log_level
        except Exception as e:
            logger.error(f"Failed to check permission {permission} for principal {principal_id}: {e}")
            granted, reason, log_level = False, DecisionReason.ERROR, self._log_level

        if log_level != AuditLogLevel.NONE:
            entry = AuditLogEntry(
                principal_id=principal_id,
                action=permission.action,
                resource_id=resource_id,
                granted=granted,
                reason=reason,
                context=dict(context or {}) if log_level == AuditLogLevel.DETAILED else None,
            )
            self.audit_emitter.emit_permission_check(entry)

        return granted

    def check_permissions(
        self,
        principal_id: str,
        permission: Permission,
        resource_id: ResourceId,
        context: Context = None
    ) -> bool:
        """The allow path alone: role grants first, then resource grants."""
        with self._lock:
            for role in self.get_principal_roles(principal_id):
                if self.role_has_permission(principal_id, role, permission, resource_id, context):
                    return True
            return self.resource_has_permission(principal_id, permission, resource_id, context)

    def is_negative_permission(self, principal_id: str, permission: Permission) -> bool:
        with self._lock:
            return self._negative_permissions.is_denied(principal_id, permission)

    def role_has_permission(
        self,
        principal_id: str,
        role: str,
        permission: Permission,
        resource_id: ResourceId,
        context: Context = None
    ) -> bool:
        """Check the grants of ``role`` closed over its inheritance."""
        with self._lock:
            return any(
                self._grant_applies(principal_id, grant, permission, resource_id, context)
                for grant in self._roles.get_role_permissions(role)
            )

    def resource_has_permission(
        self,
        principal_id: str,
        permission: Permission,
        resource_id: ResourceId,
        context: Context = None
    ) -> bool:
        with self._lock:
            role_grants = self._resource_grants.grants_for(resource_id)
            if not role_grants:
                return False
            principal_roles = self.get_principal_roles(principal_id)
            for role, grants in role_grants.items():
                if role not in principal_roles:
                    continue
                if any(
                    self._grant_applies(principal_id, grant, permission, resource_id, context)
                    for grant in grants
                ):
                    return True
            return False

    def _grant_applies(
        self,
        principal_id: str,
        grant: Permission,
        permission: Permission,
        resource_id: ResourceId,
        context: Context
    ) -> bool:
        if not permission_matches(grant, permission):
            return False
        conditions = list(grant.conditions)
        conditions.extend(
            condition
            for pattern, condition in self._principal_conditions.get(principal_id, ())
            if permission_matches(pattern, permission)
        )
        return check_conditions(conditions, principal_id, permission, resource_id, context)
