"""In-memory role registry and principal role assignments.

Both inheritance closures (role names and permission sets) walk the
``inherits`` graph with a visited set, so cyclic definitions are accepted
and each role contributes once however many paths reach it.
"""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from ...audit.services import AuditEmitter
from ...permissions.entities import Permission
from ..entities import RoleDefinition

logger = logging.getLogger(__name__)


class RoleRegistry:
    """Stores role definitions and the roles assigned directly to principals."""

    def __init__(self, emitter: AuditEmitter):
        self._emitter = emitter
        self._roles: Dict[str, RoleDefinition] = {}
        self._assignments: Dict[str, Set[str]] = defaultdict(set)

    def __contains__(self, name: str) -> bool:
        return name in self._roles

    def __len__(self) -> int:
        return len(self._roles)

    # Role definitions

    def add_role(
        self,
        name: str,
        permissions: Iterable[Permission],
        inherits: Optional[Iterable[str]] = None
    ) -> RoleDefinition:
        """Create or replace a role. Replacement is total, not additive."""
        permissions = list(permissions)
        role = RoleDefinition.create(name, permissions, inherits)
        if name in self._roles:
            logger.debug(f"Replacing role {name}")
        self._roles[name] = role
        self._emitter.emit_role_creation(name, permissions)
        return role

    def remove_role(self, name: str) -> bool:
        """Delete a role, revoke it everywhere and drop it from inheritance lists."""
        if self._roles.pop(name, None) is None:
            return False

        for principal_id, roles in self._assignments.items():
            if name in roles:
                roles.discard(name)
                self._emitter.emit_role_revocation(principal_id, name)

        for role_name, role in list(self._roles.items()):
            if name in role.inherits:
                self._roles[role_name] = role.without_parent(name)

        logger.debug(f"Removed role {name}")
        self._emitter.emit_role_removal(name)
        return True

    def get_role(self, name: str) -> Optional[RoleDefinition]:
        return self._roles.get(name)

    def role_names(self) -> List[str]:
        return list(self._roles)

    # Inheritance closure

    def add_role_and_ancestors(self, name: str, accumulator: Set[str]) -> Set[str]:
        """Add ``name`` and every role it inherits from to ``accumulator``."""
        if name in accumulator:
            return accumulator
        accumulator.add(name)
        role = self._roles.get(name)
        if role is not None:
            for parent in role.inherits:
                self.add_role_and_ancestors(parent, accumulator)
        return accumulator

    def resolve_role_names(self, names: Iterable[str]) -> Set[str]:
        resolved: Set[str] = set()
        for name in names:
            self.add_role_and_ancestors(name, resolved)
        return resolved

    def permissions_of(self, names: Iterable[str]) -> FrozenSet[Permission]:
        """Union of the grants declared directly on each of ``names``."""
        permissions: Set[Permission] = set()
        for name in names:
            role = self._roles.get(name)
            if role is not None:
                permissions.update(role.permissions)
        return frozenset(permissions)

    def get_role_permissions(self, name: str) -> FrozenSet[Permission]:
        """Grants of ``name`` closed over inheritance; empty for unknown roles."""
        if name not in self._roles:
            return frozenset()
        return self.permissions_of(self.add_role_and_ancestors(name, set()))

    # Assignments

    def assign(self, principal_id: str, role: str) -> None:
        self._assignments[principal_id].add(role)
        self._emitter.emit_role_assignment(principal_id, role)

    def revoke(self, principal_id: str, role: str) -> bool:
        roles = self._assignments.get(principal_id)
        if not roles or role not in roles:
            return False
        roles.discard(role)
        self._emitter.emit_role_revocation(principal_id, role)
        return True

    def assigned_roles(self, principal_id: str) -> FrozenSet[str]:
        """Roles assigned directly to ``principal_id``, without inheritance."""
        return frozenset(self._assignments.get(principal_id, ()))
