"""RBAC feature: the policy engine facade and its presets."""

from .services import RBAC
from .presets import build_counters_rbac, can_do

__all__ = ["RBAC", "build_counters_rbac", "can_do"]
