"""
Data Models Package

This package contains all Pydantic models used by the LentGreen ledger.
"""

from lentgreen.models.ledger import (
    DEFAULT_CURRENCY,
    Debt,
    DebtStatus,
    DebtTemplate,
    Direction,
    LedgerSnapshot,
    Person,
)
from lentgreen.models.queries import (
    FilterType,
    SortOrder,
    StatsPeriod,
    TagAmount,
    TopPersonItem,
)
from lentgreen.models.results import (
    MutationResult,
    MutationStatus,
    ValidationIssue,
    ValidationResult,
)
from lentgreen.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_CURRENCY",
    "Debt",
    "DebtStatus",
    "DebtTemplate",
    "Direction",
    "LedgerSnapshot",
    "Person",
    # Query models
    "FilterType",
    "SortOrder",
    "StatsPeriod",
    "TagAmount",
    "TopPersonItem",
    # Result models
    "MutationResult",
    "MutationStatus",
    "ValidationIssue",
    "ValidationResult",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
