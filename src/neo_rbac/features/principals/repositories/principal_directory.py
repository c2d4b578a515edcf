"""In-memory directory of principals and group membership."""

import logging
from typing import Dict, Iterator, List, Optional

from ....core.exceptions import GroupNotFoundError, PrincipalNotFoundError
from ...audit.services import AuditEmitter
from ..entities import Group, Principal, User

logger = logging.getLogger(__name__)


class PrincipalDirectory:
    """Stores principals, groups, members and subgroup links.

    Removing a principal does not cascade: role assignments, denials and
    group memberships that reference it are left in place.
    """

    def __init__(self, emitter: AuditEmitter):
        self._emitter = emitter
        self._principals: Dict[str, Principal] = {}
        self._groups: Dict[str, Group] = {}

    def __contains__(self, principal_id: str) -> bool:
        return principal_id in self._principals

    def __iter__(self) -> Iterator[Principal]:
        return iter(list(self._principals.values()))

    def __len__(self) -> int:
        return len(self._principals)

    # Principals

    def add_principal(self, principal: Principal) -> None:
        self._principals[principal.id] = principal
        if isinstance(principal, Group):
            self._groups[principal.id] = principal
        logger.debug(f"Added {principal.kind.value} principal {principal.id}")
        self._emitter.emit_principal_addition(principal)

    def remove_principal(self, principal_id: str) -> bool:
        if self._principals.pop(principal_id, None) is None:
            return False
        logger.debug(f"Removed principal {principal_id}")
        self._emitter.emit_principal_removal(principal_id)
        return True

    def get_principal(self, principal_id: str) -> Optional[Principal]:
        return self._principals.get(principal_id)

    def get_user(self, principal_id: str) -> Optional[User]:
        principal = self._principals.get(principal_id)
        return principal if isinstance(principal, User) else None

    def require_principal(self, principal_id: str) -> Principal:
        principal = self._principals.get(principal_id)
        if principal is None:
            logger.warning(f"Principal {principal_id} does not exist")
            raise PrincipalNotFoundError(principal_id)
        return principal

    # Groups

    def get_group(self, group_id: str) -> Optional[Group]:
        return self._groups.get(group_id)

    def groups(self) -> List[Group]:
        return list(self._groups.values())

    def create_group(self, group_id: str, name: str) -> Group:
        group = Group(id=group_id, name=name)
        self._groups[group_id] = group
        self._principals[group_id] = group
        logger.debug(f"Created group {group_id} ({name})")
        self._emitter.emit_group_creation(group_id, name)
        return group

    def add_to_group(self, group_id: str, principal_id: str) -> None:
        """Add a principal to a group; groups are linked as subgroups instead."""
        group = self._groups.get(group_id)
        if group is None:
            logger.warning(f"Group {group_id} does not exist")
            raise GroupNotFoundError(f"Group with id {group_id} does not exist", group_id=group_id)

        principal = self.require_principal(principal_id)

        if principal.is_group:
            self.add_subgroup(group_id, principal.id)
        else:
            group.members.add(principal_id)
        self._emitter.emit_group_addition(group_id, principal_id)

    def add_subgroup(self, parent_group_id: str, child_group_id: str) -> None:
        parent = self._groups.get(parent_group_id)
        child = self._groups.get(child_group_id)
        if parent is None or child is None:
            raise GroupNotFoundError(
                "Both parent and child groups must exist",
                parent_group_id=parent_group_id,
                child_group_id=child_group_id,
            )
        parent.subgroups.add(child_group_id)

    def remove_from_group(self, group_id: str, principal_id: str) -> bool:
        """Remove a member or subgroup link; ``False`` if there was none."""
        group = self._groups.get(group_id)
        if group is None or not group.contains(principal_id):
            return False
        group.members.discard(principal_id)
        group.subgroups.discard(principal_id)
        self._emitter.emit_group_removal(group_id, principal_id)
        return True

    # Ancestry

    def get_parent_groups(self, principal_id: str) -> List[Group]:
        """Groups that directly contain ``principal_id`` as member or subgroup."""
        return [group for group in self._groups.values() if group.contains(principal_id)]

    def get_groups_member_of(self, principal_id: str) -> List[Group]:
        """Every group ``principal_id`` belongs to, directly or through subgroups."""
        groups: Dict[str, Group] = {}
        for group in self.get_parent_groups(principal_id):
            self.add_group_and_ancestors(group, groups)
        return list(groups.values())

    def add_group_and_ancestors(self, group: Group, accumulator: Dict[str, Group]) -> Dict[str, Group]:
        if group.id in accumulator:
            return accumulator
        accumulator[group.id] = group
        for parent in self._groups.values():
            if group.id in parent.subgroups:
                self.add_group_and_ancestors(parent, accumulator)
        return accumulator
