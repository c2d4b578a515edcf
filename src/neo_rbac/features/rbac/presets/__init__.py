"""Ready-made policies built on the default roles."""

from .counters import build_counters_rbac, can_do

__all__ = ["build_counters_rbac", "can_do"]
