"""Condition evaluation services."""

from .condition_evaluator import check_conditions, evaluate_condition

__all__ = ["check_conditions", "evaluate_condition"]
