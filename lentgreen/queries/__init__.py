"""Derived ledger queries."""

from lentgreen.queries.aggregations import (
    NO_TAG,
    breakdown_by_tag,
    debts_due_soon,
    debts_in_period,
    filter_debts,
    format_balance,
    net_balance,
    period_start,
    recent_debts,
    recent_people,
    top_people,
    total_for_person,
    total_remaining,
    total_repaid,
)

__all__ = [
    "NO_TAG",
    "breakdown_by_tag",
    "debts_due_soon",
    "debts_in_period",
    "filter_debts",
    "format_balance",
    "net_balance",
    "period_start",
    "recent_debts",
    "recent_people",
    "top_people",
    "total_for_person",
    "total_remaining",
    "total_repaid",
]
