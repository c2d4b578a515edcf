"""Explicit per-principal denials that override every allow grant."""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, Set

from ...audit.services import AuditEmitter
from ..entities import Permission, permission_matches

logger = logging.getLogger(__name__)


class NegativePermissionTable:
    """Stores denials by principal.

    Matching uses the same scope rules as allow grants. Conditions attached
    to a denial are ignored: a matching denial always applies.
    """

    def __init__(self, emitter: AuditEmitter):
        self._emitter = emitter
        self._denials: Dict[str, Set[Permission]] = defaultdict(set)

    def deny_permission(self, principal_id: str, permission: Permission) -> None:
        self._denials[principal_id].add(permission)
        logger.debug(f"Denied {permission} for principal {principal_id}")
        self._emitter.emit_permission_denial(principal_id, permission)

    def remove_denied_permission(self, principal_id: str, permission: Permission) -> bool:
        denials = self._denials.get(principal_id)
        if not denials or permission not in denials:
            return False
        denials.discard(permission)
        self._emitter.emit_permission_denial_removal(principal_id, permission)
        return True

    def denials_for(self, principal_id: str) -> FrozenSet[Permission]:
        return frozenset(self._denials.get(principal_id, ()))

    def is_denied(self, principal_id: str, permission: Permission) -> bool:
        return any(
            permission_matches(denial, permission)
            for denial in self._denials.get(principal_id, ())
        )
