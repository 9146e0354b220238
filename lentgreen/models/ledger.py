"""
Core Data Models for LentGreen

These models define the schemas for everything the ledger owns:
people, debts and debt templates.

DESIGN DECISION: Models are frozen Pydantic v2 models with tuple tags.
The ledger store hands them out freely from its queries; a caller can
never mutate the store's state through a returned object. Every change
goes through the store, which swaps in a new copy of the record.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


DEFAULT_CURRENCY = "₽"


# =============================================================================
# ENUMS
# =============================================================================

class Direction(str, Enum):
    """Which party is the debtor."""
    OWED_TO_ME = "owed_to_me"
    I_OWE = "i_owe"

    @property
    def sign(self) -> int:
        """+1 for money coming in, -1 for money going out."""
        return 1 if self is Direction.OWED_TO_ME else -1


class DebtStatus(str, Enum):
    """
    Lifecycle status of a debt.

    Repayment moves ACTIVE -> PARTIALLY_REPAID -> REPAID.
    WRITTEN_OFF is only ever set by editing the debt.
    """
    ACTIVE = "active"
    PARTIALLY_REPAID = "partially_repaid"
    REPAID = "repaid"
    WRITTEN_OFF = "written_off"

    @property
    def is_open(self) -> bool:
        """Open debts still count towards balances."""
        return self in (DebtStatus.ACTIVE, DebtStatus.PARTIALLY_REPAID)


def _normalize_tags(tags: tuple[str, ...]) -> tuple[str, ...]:
    # Ordered set: first occurrence wins
    seen: set[str] = set()
    result = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return tuple(result)


# =============================================================================
# ENTITIES
# =============================================================================

class Person(BaseModel):
    """A counterparty the user lends to or borrows from."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Display name"
    )
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=200)


class Debt(BaseModel):
    """
    A single owed amount.

    person_name is a denormalized copy of the person's name. The store
    keeps it in sync when the person is renamed.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Identity
    id: UUID = Field(default_factory=uuid4)
    person_id: UUID
    person_name: str = Field(..., max_length=200)

    direction: Direction

    # Amounts
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Original amount"
    )
    remaining_amount: Decimal = Field(
        ...,
        ge=0,
        description="Outstanding unpaid balance"
    )
    currency: str = Field(default=DEFAULT_CURRENCY, max_length=8)

    description: Optional[str] = Field(default=None, max_length=500)
    date: datetime
    due_date: Optional[datetime] = None
    status: DebtStatus = DebtStatus.ACTIVE
    tags: tuple[str, ...] = ()
    notes: str = ""

    creation_date: datetime = Field(
        default_factory=datetime.now,
        description="When the debt was recorded"
    )

    @field_validator('tags')
    @classmethod
    def normalize_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _normalize_tags(v)

    @model_validator(mode='after')
    def validate_remaining(self) -> 'Debt':
        """Remaining can never exceed the original amount."""
        if self.remaining_amount > self.amount:
            raise ValueError("Remaining amount cannot exceed amount")
        return self

    @classmethod
    def create(
        cls,
        person: Person,
        direction: Direction,
        amount: Decimal,
        date: Optional[datetime] = None,
        **fields,
    ) -> 'Debt':
        """Build a brand-new active debt with nothing repaid yet."""
        return cls(
            person_id=person.id,
            person_name=person.name,
            direction=direction,
            amount=amount,
            remaining_amount=amount,
            date=date or datetime.now(),
            status=DebtStatus.ACTIVE,
            **fields,
        )

    @property
    def progress(self) -> Decimal:
        """Repaid share of the original amount, 0 for zero-amount debts."""
        if self.amount <= 0:
            return Decimal("0")
        return (self.amount - self.remaining_amount) / self.amount

    @property
    def is_open(self) -> bool:
        return self.status.is_open

    @property
    def signed_remaining(self) -> Decimal:
        return self.remaining_amount * self.direction.sign


class DebtTemplate(BaseModel):
    """A reusable preset for fast debt entry. Using it never consumes it."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=200)
    person_name: Optional[str] = Field(default=None, max_length=200)
    direction: Direction
    currency: str = Field(default=DEFAULT_CURRENCY, max_length=8)
    tags: tuple[str, ...] = ()

    @field_validator('tags')
    @classmethod
    def normalize_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return _normalize_tags(v)


class LedgerSnapshot(BaseModel):
    """The three persisted collections, in insertion order."""

    debts: list[Debt] = Field(default_factory=list)
    people: list[Person] = Field(default_factory=list)
    templates: list[DebtTemplate] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.debts or self.people or self.templates)
