"""Role domain entity for neo-rbac."""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from ...permissions.entities import Permission


@dataclass(frozen=True)
class RoleDefinition:
    """A named bundle of grants that may inherit from other roles.

    ``inherits`` is ordered and may name roles that are not (yet) defined.
    Definitions are immutable; the registry replaces them instead of editing.
    """

    name: str
    permissions: FrozenSet[Permission] = field(default_factory=frozenset)
    inherits: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError("Role name cannot be empty")
        object.__setattr__(self, "permissions", frozenset(self.permissions))
        object.__setattr__(self, "inherits", tuple(self.inherits or ()))

    @classmethod
    def create(
        cls,
        name: str,
        permissions: Iterable[Permission],
        inherits: Optional[Iterable[str]] = None
    ) -> "RoleDefinition":
        return cls(name=name, permissions=frozenset(permissions), inherits=tuple(inherits or ()))

    def without_parent(self, parent: str) -> "RoleDefinition":
        """Return a copy of this role that no longer inherits from ``parent``."""
        return RoleDefinition(
            name=self.name,
            permissions=self.permissions,
            inherits=tuple(name for name in self.inherits if name != parent),
        )

    def __str__(self) -> str:
        return f"Role({self.name})"
