"""
FastAPI Permission Dependencies

Request guard that evaluates ``RBAC.has_permission`` for an endpoint:
- Principal resolved from a request header with an anonymous fallback
- Scope fixed per endpoint, resource id taken from a path parameter
- Condition context (client IP, current time) built from the request
"""

import ipaddress
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from fastapi import HTTPException, Request, status

from ...config.constants import WILDCARD, ContextKeys
from ...config.settings import RBACSettings, get_settings
from ...features.permissions.entities import Permission, ResourceId
from ...features.rbac.services import RBAC

logger = logging.getLogger(__name__)


def get_client_ip(request: Request, trust_forwarded: bool = False, trusted_proxies: Iterable[str] = ()) -> Optional[str]:
    """Get the client IP, optionally honouring proxy headers."""
    if trust_forwarded:
        trusted = set(trusted_proxies)
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            for ip in (part.strip() for part in forwarded_for.split(",")):
                try:
                    ipaddress.ip_address(ip)
                except ValueError:
                    continue
                if ip not in trusted:
                    return ip

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            try:
                ipaddress.ip_address(real_ip)
                return real_ip
            except ValueError:
                pass

    if request.client:
        return request.client.host
    return None


class RequirePermission:
    """
    Dependency enforcing a permission on an endpoint.

    Usage:
        guard = RequirePermission(rbac, "increment", tenant_id="noroutine",
                                  subscription_id="system", namespace_id="system",
                                  resource_type_id="counter", resource_param="name")

        @app.post("/counters/{name}/increment")
        async def increment(name: str, principal_id: str = Depends(guard)):
            ...

    Returns the resolved principal id when access is granted and raises
    ``HTTPException(403)`` otherwise.
    """

    def __init__(
        self,
        rbac: RBAC,
        action: str,
        *,
        tenant_id: str = WILDCARD,
        subscription_id: str = WILDCARD,
        namespace_id: str = WILDCARD,
        resource_type_id: str = WILDCARD,
        resource_param: str = "resource_id",
        trust_forwarded: bool = False,
        trusted_proxies: Iterable[str] = (),
        settings: Optional[RBACSettings] = None
    ):
        self.rbac = rbac
        self.action = action
        self.tenant_id = tenant_id
        self.subscription_id = subscription_id
        self.namespace_id = namespace_id
        self.resource_type_id = resource_type_id
        self.resource_param = resource_param
        self.trust_forwarded = trust_forwarded
        self.trusted_proxies = tuple(trusted_proxies)
        self.settings = settings or get_settings()

    def resolve_principal(self, request: Request) -> str:
        return request.headers.get(self.settings.principal_header) or self.settings.anonymous_principal_id

    def build_resource_id(self, request: Request) -> ResourceId:
        return ResourceId(
            tenant_id=self.tenant_id,
            subscription_id=self.subscription_id,
            namespace_id=self.namespace_id,
            resource_type_id=self.resource_type_id,
            resource_id=str(request.path_params.get(self.resource_param, WILDCARD)),
        )

    def build_context(self, request: Request) -> Dict[str, Any]:
        return {
            ContextKeys.IP: get_client_ip(request, self.trust_forwarded, self.trusted_proxies),
            ContextKeys.CURRENT_TIME: datetime.now(),
        }

    async def __call__(self, request: Request) -> str:
        principal_id = self.resolve_principal(request)
        resource_id = self.build_resource_id(request)
        permission = Permission.for_resource(self.action, resource_id)

        if not self.rbac.has_permission(principal_id, permission, resource_id, self.build_context(request)):
            logger.info(f"Denied {self.action} on {resource_id.key} for principal {principal_id}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: {self.action} on {resource_id.key}"
            )
        return principal_id
