"""Permission domain entities for neo-rbac.

A permission is an action plus a five-dimensional scope (tenant, subscription,
namespace, resource type, resource id). Every dimension is either a literal
value or the wildcard ``*``. The same type is used for grants stored on roles
and resources, for explicit denials, and for the request being checked.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Optional, Tuple, Union

from ....config.constants import WILDCARD, PermissionEffect, ResourceKeys

if TYPE_CHECKING:
    from ...conditions.entities import Condition


@dataclass(frozen=True)
class ResourceId:
    """Identifies the object instance a permission is checked against."""

    tenant_id: str
    subscription_id: str
    namespace_id: str
    resource_type_id: str
    resource_id: str

    @property
    def key(self) -> str:
        """Canonical resource key."""
        return ResourceKeys.PATTERN.format(
            tenant_id=self.tenant_id,
            subscription_id=self.subscription_id,
            namespace_id=self.namespace_id,
            resource_type_id=self.resource_type_id,
            resource_id=self.resource_id,
        )

    @classmethod
    def from_resource(cls, resource: "Resource") -> "ResourceId":
        return cls(
            tenant_id=resource.tenant_id,
            subscription_id=resource.subscription_id,
            namespace_id=resource.namespace_id,
            resource_type_id=resource.type_id,
            resource_id=resource.id,
        )

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Resource:
    """A stored resource as described by the embedding application."""

    id: str
    tenant_id: str
    subscription_id: str
    namespace_id: str
    type_id: str
    parent_id: Optional[str] = None

    @property
    def key(self) -> str:
        return ResourceId.from_resource(self).key


def resource_key(resource: Union[ResourceId, Resource]) -> str:
    """Build the canonical ``rid:`` key for a resource or resource id."""
    return resource.key


@dataclass(frozen=True)
class Permission:
    """An action on a (possibly wildcarded) scope, optionally conditional.

    ``effect`` is recorded with the grant but the allow path never reads it;
    denials are enforced through the negative permission table only.
    """

    action: str
    tenant_id: str = WILDCARD
    subscription_id: str = WILDCARD
    namespace_id: str = WILDCARD
    resource_type_id: str = WILDCARD
    resource_id: str = WILDCARD
    effect: PermissionEffect = PermissionEffect.ALLOW
    conditions: Tuple["Condition", ...] = field(default=())

    def __post_init__(self):
        if not isinstance(self.effect, PermissionEffect):
            object.__setattr__(self, "effect", PermissionEffect(self.effect))
        if not isinstance(self.conditions, tuple):
            object.__setattr__(self, "conditions", tuple(self.conditions))

    @classmethod
    def for_resource(
        cls,
        action: str,
        resource: ResourceId,
        effect: PermissionEffect = PermissionEffect.ALLOW
    ) -> "Permission":
        """Build a request permission whose scope is exactly ``resource``."""
        return cls(
            action=action,
            tenant_id=resource.tenant_id,
            subscription_id=resource.subscription_id,
            namespace_id=resource.namespace_id,
            resource_type_id=resource.resource_type_id,
            resource_id=resource.resource_id,
            effect=effect,
        )

    def with_conditions(self, *conditions: "Condition") -> "Permission":
        """Return a copy of this permission carrying additional conditions."""
        return replace(self, conditions=self.conditions + tuple(conditions))

    def matches(self, requested: "Permission") -> bool:
        """Check if this grant covers ``requested`` (see ``permission_matches``)."""
        return permission_matches(self, requested)

    def __str__(self) -> str:
        return (
            f"{self.action}@{self.tenant_id}:{self.subscription_id}:"
            f"{self.namespace_id}:{self.resource_type_id}:{self.resource_id}"
        )


def _field_matches(granted: str, requested: str) -> bool:
    return granted == WILDCARD or granted == requested


def permission_matches(granted: Permission, requested: Permission) -> bool:
    """Check if a granted permission matches a requested one.

    Every scope dimension and the action must be the wildcard or equal.
    Conditions and effect are not part of the match.
    """
    return (
        _field_matches(granted.tenant_id, requested.tenant_id)
        and _field_matches(granted.subscription_id, requested.subscription_id)
        and _field_matches(granted.namespace_id, requested.namespace_id)
        and _field_matches(granted.resource_type_id, requested.resource_type_id)
        and _field_matches(granted.resource_id, requested.resource_id)
        and _field_matches(granted.action, requested.action)
    )
