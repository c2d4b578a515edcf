"""Condition entities package."""

from .condition import (
    Condition,
    ConditionKind,
    TimeWindowCondition,
    IPAllowListCondition,
    IPFilterCondition,
)

__all__ = [
    "Condition",
    "ConditionKind",
    "TimeWindowCondition",
    "IPAllowListCondition",
    "IPFilterCondition",
]
