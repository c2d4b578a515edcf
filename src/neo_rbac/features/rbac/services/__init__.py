"""Policy engine services."""

from .policy_engine import RBAC

__all__ = ["RBAC"]
