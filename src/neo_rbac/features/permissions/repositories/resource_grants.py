"""Per-resource grant overrides keyed by the canonical resource key."""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Set, Union

from ...audit.services import AuditEmitter
from ..entities import Permission, Resource, ResourceId

logger = logging.getLogger(__name__)


class ResourceGrantTable:
    """Maps ``rid:...`` keys to role -> grants for that one resource.

    Entries only ever add access; nothing stored here can deny.
    """

    def __init__(self, emitter: AuditEmitter):
        self._emitter = emitter
        self._grants: Dict[str, Dict[str, Set[Permission]]] = defaultdict(lambda: defaultdict(set))

    def assign_resource_permission(
        self,
        resource: Union[ResourceId, Resource],
        role: str,
        permission: Permission
    ) -> None:
        key = resource.key
        self._grants[key][role].add(permission)
        logger.debug(f"Granted {permission} to role {role} on {key}")
        self._emitter.emit_resource_permission_assignment(resource, role, permission)

    def grants_for(self, resource: Union[ResourceId, Resource]) -> Dict[str, FrozenSet[Permission]]:
        role_grants = self._grants.get(resource.key)
        if not role_grants:
            return {}
        return {role: frozenset(grants) for role, grants in role_grants.items()}

    def __len__(self) -> int:
        return len(self._grants)
