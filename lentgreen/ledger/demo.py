"""First-run demo data: three people, three debts."""

from datetime import datetime, timedelta
from decimal import Decimal

from lentgreen.models.ledger import (
    Debt,
    DebtStatus,
    Direction,
    LedgerSnapshot,
    Person,
)


def demo_snapshot(now: datetime, currency: str = "₽") -> LedgerSnapshot:
    """Build the demo ledger relative to `now`."""
    alex = Person(name="Alex")
    maria = Person(name="Maria")
    dmitry = Person(name="Dmitry")

    debts = [
        Debt(
            person_id=alex.id,
            person_name=alex.name,
            direction=Direction.OWED_TO_ME,
            amount=Decimal("5000"),
            remaining_amount=Decimal("5000"),
            currency=currency,
            description="Lunch",
            date=now - timedelta(days=7),
            due_date=now + timedelta(days=7),
            status=DebtStatus.ACTIVE,
            tags=["food", "friends"],
            creation_date=now,
        ),
        Debt(
            person_id=maria.id,
            person_name=maria.name,
            direction=Direction.I_OWE,
            amount=Decimal("3000"),
            remaining_amount=Decimal("3000"),
            currency=currency,
            description="Tickets",
            date=now - timedelta(days=14),
            status=DebtStatus.ACTIVE,
            tags=["entertainment"],
            creation_date=now,
        ),
        Debt(
            person_id=dmitry.id,
            person_name=dmitry.name,
            direction=Direction.OWED_TO_ME,
            amount=Decimal("2000"),
            remaining_amount=Decimal("0"),
            currency=currency,
            description="Coffee",
            date=now - timedelta(days=30),
            status=DebtStatus.REPAID,
            tags=["food"],
            creation_date=now,
        ),
    ]

    return LedgerSnapshot(debts=debts, people=[alex, maria, dmitry])
