"""FastAPI integration for neo-rbac."""

from .dependencies import RequirePermission, get_client_ip

__all__ = ["RequirePermission", "get_client_ip"]
