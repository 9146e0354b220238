"""
Query Models

Options and result items for the ledger's derived views
(debt list, statistics screen).
"""

from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel


class FilterType(str, Enum):
    """Status filter for the debt list."""
    ALL = "all"
    ACTIVE = "active"  # active and partially repaid


class SortOrder(str, Enum):
    """Sort orders for the debt list."""
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    AMOUNT_DESC = "amount_desc"  # by remaining amount
    AMOUNT_ASC = "amount_asc"
    PERSON = "person"


class StatsPeriod(str, Enum):
    """Calendar-relative windows for the statistics queries."""
    THIS_MONTH = "this_month"
    LAST_3_MONTHS = "last_3_months"
    THIS_YEAR = "this_year"
    ALL = "all"


class TagAmount(BaseModel):
    """Signed outstanding amount attributed to one tag."""

    tag: str
    amount: Decimal


class TopPersonItem(BaseModel):
    """Absolute net outstanding amount with one person."""

    person_id: UUID
    name: str
    amount: Decimal
