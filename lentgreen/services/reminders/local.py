"""
Local Reminder Scheduler

Keeps pending reminder requests in memory, keyed by a per-debt
identifier. A platform adapter (desktop notifications, a cron job, a
chat bot) reads pending() and delivers whatever is due.

Reminders fire at a fixed time of day, a configurable number of days
before the due date.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional
from uuid import UUID

from pydantic import BaseModel

from lentgreen.activity import get_logger
from lentgreen.config import ReminderSettings
from lentgreen.models.ledger import Debt, DebtStatus
from lentgreen.services.reminders.interface import ReminderSchedulerInterface


IDENTIFIER_PREFIX = "lentgreen_debt_"
REMINDER_TITLE = "LentGreen"


class ReminderRequest(BaseModel):
    """A scheduled, not yet delivered reminder."""

    identifier: str
    debt_id: UUID
    title: str
    body: str
    fire_at: datetime


def reminder_identifier(debt_id: UUID) -> str:
    return f"{IDENTIFIER_PREFIX}{debt_id}"


def is_reminder_eligible(debt: Debt) -> bool:
    return debt.due_date is not None and debt.status not in (
        DebtStatus.REPAID,
        DebtStatus.WRITTEN_OFF,
    )


class LocalReminderScheduler(ReminderSchedulerInterface):
    """In-memory reminder scheduler honoring ReminderSettings."""

    def __init__(self, settings: Optional[ReminderSettings] = None):
        self._settings = settings or ReminderSettings()
        self._pending: dict[str, ReminderRequest] = {}
        self._logger = get_logger("lentgreen.reminders")

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def set_enabled(self, enabled: bool, debts: Iterable[Debt]) -> None:
        """Toggle reminders globally and rebuild the pending set."""
        self._settings = self._settings.model_copy(update={"enabled": enabled})
        self.reschedule_all(debts)

    def fire_time(self, due_date: datetime) -> datetime:
        day = due_date - timedelta(days=self._settings.days_before)
        return day.replace(
            hour=self._settings.hour,
            minute=self._settings.minute,
            second=0,
            microsecond=0,
        )

    def build_request(self, debt: Debt) -> ReminderRequest:
        return ReminderRequest(
            identifier=reminder_identifier(debt.id),
            debt_id=debt.id,
            title=REMINDER_TITLE,
            body=f"Due: {debt.person_name} - {int(debt.remaining_amount)} {debt.currency}",
            fire_at=self.fire_time(debt.due_date),
        )

    def schedule(self, debt: Debt) -> None:
        if not self.enabled:
            return
        if not is_reminder_eligible(debt):
            self.cancel(debt.id)
            return

        request = self.build_request(debt)
        self._pending[request.identifier] = request
        self._logger.debug(
            "reminder_scheduled",
            debt_id=str(debt.id),
            fire_at=request.fire_at.isoformat(),
        )

    def cancel(self, debt_id: UUID) -> None:
        if self._pending.pop(reminder_identifier(debt_id), None) is not None:
            self._logger.debug("reminder_cancelled", debt_id=str(debt_id))

    def reschedule_all(self, debts: Iterable[Debt]) -> None:
        stale = [key for key in self._pending if key.startswith(IDENTIFIER_PREFIX)]
        for key in stale:
            del self._pending[key]

        if not self.enabled:
            return
        for debt in debts:
            if is_reminder_eligible(debt):
                self.schedule(debt)

    def pending(self) -> list[ReminderRequest]:
        """Pending reminders, soonest first."""
        return sorted(self._pending.values(), key=lambda r: r.fire_at)

    def get(self, debt_id: UUID) -> Optional[ReminderRequest]:
        return self._pending.get(reminder_identifier(debt_id))
