"""Policy preset for the counters application.

Anonymous visitors may increment any counter and do anything inside the
``transient`` namespace; ``god`` is an administrator.
"""

from typing import Any, Mapping, Optional

from ....config.constants import WILDCARD
from ...permissions.entities import Permission, ResourceId
from ...principals.entities import User
from ..services.policy_engine import RBAC

COUNTER_RESOURCE_TYPE = "counter"
COUNTERS_TENANT_ID = "noroutine"
COUNTERS_SUBSCRIPTION_ID = "system"
COUNTERS_NAMESPACE_ID = "system"
TRANSIENT_NAMESPACE_ID = "transient"


def build_counters_rbac(**kwargs) -> RBAC:
    """Create an engine with the default roles plus the counters policy."""
    rbac = RBAC.with_default_roles(**kwargs)

    rbac.add_principal(User(id="anonymous", username="anonymous coward"))
    rbac.add_principal(User(id="god", username="god mode"))

    rbac.add_role(
        "incrementor",
        [Permission(action="increment", resource_type_id=COUNTER_RESOURCE_TYPE)],
        inherits=["viewer"],
    )
    rbac.add_role(
        "transient_namespace_admin",
        [Permission(action=WILDCARD, namespace_id=TRANSIENT_NAMESPACE_ID)],
    )

    rbac.assign_role("anonymous", "transient_namespace_admin")
    rbac.assign_role("anonymous", "incrementor")
    rbac.assign_role("god", "admin")
    return rbac


def can_do(
    rbac: RBAC,
    principal_id: str,
    action: str,
    counter_name: str,
    context: Optional[Mapping[str, Any]] = None
) -> bool:
    """Check whether ``principal_id`` may perform ``action`` on a system counter."""
    permission = Permission(
        action=action,
        tenant_id=COUNTERS_TENANT_ID,
        subscription_id=WILDCARD,
        namespace_id=COUNTERS_NAMESPACE_ID,
        resource_type_id=COUNTER_RESOURCE_TYPE,
        resource_id=counter_name,
    )
    resource_id = ResourceId(
        tenant_id=COUNTERS_TENANT_ID,
        subscription_id=COUNTERS_SUBSCRIPTION_ID,
        namespace_id=COUNTERS_NAMESPACE_ID,
        resource_type_id=COUNTER_RESOURCE_TYPE,
        resource_id=counter_name,
    )
    return rbac.has_permission(principal_id, permission, resource_id, context)
