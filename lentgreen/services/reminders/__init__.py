"""Due-date reminder services."""

from lentgreen.services.reminders.interface import ReminderSchedulerInterface
from lentgreen.services.reminders.local import (
    LocalReminderScheduler,
    ReminderRequest,
    reminder_identifier,
)

__all__ = [
    "LocalReminderScheduler",
    "ReminderRequest",
    "ReminderSchedulerInterface",
    "reminder_identifier",
]
