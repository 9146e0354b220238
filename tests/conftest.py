"""
Shared fixtures for LentGreen tests.

Every test runs against in-memory storage, an enabled local reminder
scheduler and a fixed clock, so nothing touches disk or the real time.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from lentgreen.activity import ActivityLogger
from lentgreen.config import AppSettings, ReminderSettings, StorageSettings
from lentgreen.ledger import LedgerStore
from lentgreen.models.ledger import Debt, Direction, Person
from lentgreen.services.reminders import LocalReminderScheduler
from lentgreen.services.storage import InMemoryLedgerStorage


NOW = datetime(2026, 10, 19, 12, 0, 0)


def make_debt(
    person: Person,
    amount: str = "1000",
    direction: Direction = Direction.OWED_TO_ME,
    **fields,
) -> Debt:
    """Active debt for `person` dated NOW unless overridden."""
    fields.setdefault("date", NOW)
    return Debt.create(
        person=person,
        direction=direction,
        amount=Decimal(amount),
        **fields,
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage(StorageSettings(backend="memory"))


@pytest.fixture
def reminders() -> LocalReminderScheduler:
    return LocalReminderScheduler(ReminderSettings(enabled=True))


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(seed_demo_data=False)


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def store(storage, reminders, app_settings, clock, events) -> LedgerStore:
    """A loaded, empty store whose events are collected in `events`."""
    ledger = LedgerStore(
        storage=storage,
        reminders=reminders,
        activity_logger=ActivityLogger(),
        settings=app_settings,
        clock=clock,
    )
    ledger.load()
    ledger.subscribe(events.append)
    return ledger


@pytest.fixture
def alex(store) -> Person:
    person = Person(name="Alex")
    store.add_person(person)
    return person
