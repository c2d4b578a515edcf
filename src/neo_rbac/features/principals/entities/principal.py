"""Principal domain entities for neo-rbac.

A principal is anything that can hold roles: a user, a service, or a group.
Groups additionally carry their direct members and their subgroups.
"""

from dataclasses import dataclass, field
from typing import Optional, Set

from ....config.constants import PrincipalKind


@dataclass
class Principal:
    """Base principal: an opaque id plus its kind."""

    id: str
    kind: PrincipalKind

    def __post_init__(self):
        if not isinstance(self.kind, PrincipalKind):
            self.kind = PrincipalKind(self.kind)

    @property
    def is_group(self) -> bool:
        return self.kind == PrincipalKind.GROUP


@dataclass(kw_only=True)
class User(Principal):
    username: str
    kind: PrincipalKind = field(default=PrincipalKind.USER, init=False)


@dataclass(kw_only=True)
class Service(Principal):
    name: Optional[str] = None
    kind: PrincipalKind = field(default=PrincipalKind.SERVICE, init=False)


@dataclass(kw_only=True)
class Group(Principal):
    """A principal whose roles flow to its members and nested subgroups."""

    name: str
    members: Set[str] = field(default_factory=set)
    subgroups: Set[str] = field(default_factory=set)
    kind: PrincipalKind = field(default=PrincipalKind.GROUP, init=False)

    def contains(self, principal_id: str) -> bool:
        """Check if ``principal_id`` is a direct member or direct subgroup."""
        return principal_id in self.members or principal_id in self.subgroups
