"""
Ledger Query Functions

DESIGN DECISION: Every derived view is a pure function of a debt list
(plus "now" where dates matter). The store passes in its own state and
clock; nothing here can mutate anything.

Balances only count open debts (active or partially repaid), using the
remaining amount. "Repaid" totals use the original amount instead.
"""

import calendar
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence
from uuid import UUID

from lentgreen.models.ledger import Debt, DebtStatus, Direction, Person
from lentgreen.models.queries import (
    FilterType,
    SortOrder,
    StatsPeriod,
    TagAmount,
    TopPersonItem,
)


ZERO = Decimal("0")

# Bucket for debts without any tag in the tag breakdown
NO_TAG = "(no tag)"

MINUS_SIGN = "−"


# =============================================================================
# FILTERING AND SORTING
# =============================================================================

def open_debts(debts: Iterable[Debt]) -> list[Debt]:
    return [debt for debt in debts if debt.is_open]


def repaid_debts(debts: Iterable[Debt]) -> list[Debt]:
    return [debt for debt in debts if debt.status == DebtStatus.REPAID]


def matches_search(debt: Debt, search_text: str) -> bool:
    """Case-insensitive substring match on person name or description."""
    needle = search_text.casefold()
    if needle in debt.person_name.casefold():
        return True
    return debt.description is not None and needle in debt.description.casefold()


def sort_debts(debts: Iterable[Debt], sort_order: SortOrder) -> list[Debt]:
    """Stable sort; debts with equal keys keep their relative order."""
    if sort_order == SortOrder.DATE_DESC:
        return sorted(debts, key=lambda d: d.date, reverse=True)
    if sort_order == SortOrder.DATE_ASC:
        return sorted(debts, key=lambda d: d.date)
    if sort_order == SortOrder.AMOUNT_DESC:
        return sorted(debts, key=lambda d: d.remaining_amount, reverse=True)
    if sort_order == SortOrder.AMOUNT_ASC:
        return sorted(debts, key=lambda d: d.remaining_amount)
    return sorted(debts, key=lambda d: d.person_name.casefold())


def filter_debts(
    debts: Iterable[Debt],
    filter_type: FilterType = FilterType.ALL,
    search_text: str = "",
    sort_order: SortOrder = SortOrder.DATE_DESC,
) -> list[Debt]:
    """Status filter, then text search, then sort."""
    result = list(debts)
    if filter_type == FilterType.ACTIVE:
        result = open_debts(result)
    if search_text:
        result = [debt for debt in result if matches_search(debt, search_text)]
    return sort_debts(result, sort_order)


def recent_people(
    debts: Sequence[Debt],
    people: Sequence[Person],
    window: int = 50,
) -> list[Person]:
    """
    People referenced by the most recently added debts.

    Uses insertion order, not debt date: the last `window` debts are
    walked newest first and each person is kept once.
    """
    by_id = {person.id: person for person in people}
    seen: set[UUID] = set()
    result = []
    for debt in reversed(debts[-window:]):
        person = by_id.get(debt.person_id)
        if person is None or person.id in seen:
            continue
        seen.add(person.id)
        result.append(person)
    return result


def debts_due_soon(
    debts: Iterable[Debt],
    now: datetime,
    days: int = 7,
) -> list[Debt]:
    """Open debts due within [now, now + days], soonest first."""
    end = now + timedelta(days=days)
    due = [
        debt for debt in open_debts(debts)
        if debt.due_date is not None and now <= debt.due_date <= end
    ]
    return sorted(due, key=lambda d: d.due_date)


def recent_debts(debts: Iterable[Debt], limit: int = 5) -> list[Debt]:
    return sort_debts(debts, SortOrder.DATE_DESC)[:limit]


# =============================================================================
# TOTALS
# =============================================================================

def total_remaining(debts: Iterable[Debt], direction: Direction) -> Decimal:
    """Sum of remaining amounts of open debts in one direction."""
    return sum(
        (debt.remaining_amount for debt in open_debts(debts) if debt.direction == direction),
        ZERO,
    )


def total_repaid(debts: Iterable[Debt]) -> Decimal:
    """Sum of original amounts of fully repaid debts."""
    return sum((debt.amount for debt in repaid_debts(debts)), ZERO)


def net_balance(debts: Sequence[Debt]) -> Decimal:
    return total_remaining(debts, Direction.OWED_TO_ME) - total_remaining(debts, Direction.I_OWE)


def total_for_person(debts: Iterable[Debt], person_id: UUID) -> Decimal:
    """Unsigned remaining amount over the person's open debts."""
    return sum(
        (debt.remaining_amount for debt in open_debts(debts) if debt.person_id == person_id),
        ZERO,
    )


# =============================================================================
# PERIODS AND BREAKDOWNS
# =============================================================================

def subtract_months(moment: datetime, months: int) -> datetime:
    """Same wall-clock time `months` calendar months earlier, day clamped."""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: StatsPeriod, now: datetime) -> Optional[datetime]:
    """Lower bound of a statistics period, None for all time."""
    if period == StatsPeriod.THIS_MONTH:
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == StatsPeriod.LAST_3_MONTHS:
        return subtract_months(now, 3)
    if period == StatsPeriod.THIS_YEAR:
        return now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


def debts_in_period(
    debts: Iterable[Debt],
    period: StatsPeriod,
    now: datetime,
) -> list[Debt]:
    start = period_start(period, now)
    if start is None:
        return list(debts)
    return [debt for debt in debts if debt.date >= start]


def breakdown_by_tag(debts: Iterable[Debt]) -> list[TagAmount]:
    """
    Signed outstanding amount per tag.

    A debt's signed remaining amount is split evenly over its tags.
    Result is ordered by descending absolute amount.
    """
    totals: dict[str, Decimal] = {}
    for debt in open_debts(debts):
        amount = debt.signed_remaining
        if not debt.tags:
            totals[NO_TAG] = totals.get(NO_TAG, ZERO) + amount
            continue
        share = amount / len(debt.tags)
        for tag in debt.tags:
            totals[tag] = totals.get(tag, ZERO) + share

    items = [TagAmount(tag=tag, amount=amount) for tag, amount in totals.items()]
    return sorted(items, key=lambda item: abs(item.amount), reverse=True)


def top_people(debts: Iterable[Debt], limit: int = 5) -> list[TopPersonItem]:
    """People with the largest absolute net outstanding amount."""
    names: dict[UUID, str] = {}
    totals: dict[UUID, Decimal] = {}
    for debt in open_debts(debts):
        names.setdefault(debt.person_id, debt.person_name)
        totals[debt.person_id] = totals.get(debt.person_id, ZERO) + debt.signed_remaining

    items = [
        TopPersonItem(person_id=person_id, name=names[person_id], amount=abs(amount))
        for person_id, amount in totals.items()
    ]
    return sorted(items, key=lambda item: item.amount, reverse=True)[:limit]


# =============================================================================
# FORMATTING
# =============================================================================

def format_balance(value: Decimal, currency: str) -> str:
    """Whole-number balance with a leading minus sign when negative."""
    sign = "" if value >= 0 else MINUS_SIGN
    return f"{sign}{int(abs(value))} {currency}"
