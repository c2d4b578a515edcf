"""Evaluation of grant conditions against a request context."""

import logging
from datetime import datetime
from ipaddress import ip_address
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ....config.constants import ContextKeys
from ...permissions.entities import Permission, ResourceId
from ..entities import (
    Condition,
    ConditionKind,
    IPAllowListCondition,
    IPFilterCondition,
    TimeWindowCondition,
)

logger = logging.getLogger(__name__)

Context = Optional[Mapping[str, Any]]


def _current_time(context: Context) -> datetime:
    if context:
        current = context.get(ContextKeys.CURRENT_TIME) or context.get(ContextKeys.CURRENT_TIME_ALIAS)
        if current is not None:
            return current
    return datetime.now()


def _request_ip(context: Context) -> Optional[str]:
    if not context:
        return None
    return context.get(ContextKeys.IP) or None


def _check_time_window(condition: TimeWindowCondition, context: Context) -> bool:
    hour = _current_time(context).hour
    if condition.spans_midnight:
        return hour >= condition.start_hour or hour < condition.end_hour
    return condition.start_hour <= hour < condition.end_hour


def _check_ip_allow_list(condition: IPAllowListCondition, context: Context) -> bool:
    ip = _request_ip(context)
    if ip is None:
        return False
    return ip in condition.allowed_ips


def _check_ip_filter(condition: IPFilterCondition, context: Context) -> bool:
    raw_ip = _request_ip(context)
    if raw_ip is None:
        return False

    try:
        ip = ip_address(raw_ip)
    except ValueError:
        logger.warning(f"Unparseable client address in context: {raw_ip!r}")
        return False

    def in_subnet(network) -> bool:
        return ip.version == network.version and ip in network

    if raw_ip in condition.blocked_ips:
        return False
    if any(in_subnet(network) for network in condition.blocked_subnets):
        return False

    if not condition.has_allow_list:
        return True

    if raw_ip in condition.allowed_ips:
        return True
    return any(in_subnet(network) for network in condition.allowed_subnets)


_EVALUATORS: Dict[ConditionKind, Callable[[Any, Context], bool]] = {
    ConditionKind.TIME_WINDOW: _check_time_window,
    ConditionKind.IP_ALLOW_LIST: _check_ip_allow_list,
    ConditionKind.IP_FILTER: _check_ip_filter,
}


def evaluate_condition(
    condition: Condition,
    principal_id: str,
    permission: Permission,
    resource_id: Optional[ResourceId],
    context: Context = None
) -> bool:
    """Evaluate a single condition.

    ``principal_id``, ``permission`` and ``resource_id`` describe the request
    being checked; the built-in variants only read ``context``.
    Unknown condition kinds fail closed.
    """
    evaluator = _EVALUATORS.get(getattr(condition, "kind", None))
    if evaluator is None:
        logger.warning(
            f"No evaluator for condition {condition!r} on {permission} for principal {principal_id}"
        )
        return False
    return evaluator(condition, context)


def check_conditions(
    conditions: Iterable[Condition],
    principal_id: str,
    permission: Permission,
    resource_id: Optional[ResourceId],
    context: Context = None
) -> bool:
    """AND together all conditions; an empty collection always passes."""
    return all(
        evaluate_condition(condition, principal_id, permission, resource_id, context)
        for condition in conditions
    )
