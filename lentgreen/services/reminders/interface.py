"""
Abstract Reminder Scheduler Interface

The ledger store tells the scheduler about every debt it adds, edits,
repays or deletes. It never waits for or inspects the outcome; delivering
the notification is the platform's business.
"""

from abc import ABC, abstractmethod
from typing import Iterable
from uuid import UUID

from lentgreen.models.ledger import Debt


class ReminderSchedulerInterface(ABC):
    """Schedules and cancels due-date reminders for debts."""

    @abstractmethod
    def schedule(self, debt: Debt) -> None:
        """
        (Re)schedule the reminder for a debt.

        Debts without a due date, or that are repaid or written off,
        get their pending reminder cancelled instead.
        """
        pass

    @abstractmethod
    def cancel(self, debt_id: UUID) -> None:
        """Cancel the pending reminder for a debt, if any."""
        pass

    @abstractmethod
    def reschedule_all(self, debts: Iterable[Debt]) -> None:
        """
        Drop every pending ledger reminder, then schedule one for each
        eligible debt (only when reminders are enabled).
        """
        pass
