"""Conditions feature for neo-rbac.

Runtime predicates (time window, IP allow list, IP/CIDR filter) that a grant
can carry and that must all hold for the grant to apply.
"""

from .entities import (
    Condition,
    ConditionKind,
    TimeWindowCondition,
    IPAllowListCondition,
    IPFilterCondition,
)
from .services import check_conditions, evaluate_condition

__all__ = [
    "Condition",
    "ConditionKind",
    "TimeWindowCondition",
    "IPAllowListCondition",
    "IPFilterCondition",
    "check_conditions",
    "evaluate_condition",
]
