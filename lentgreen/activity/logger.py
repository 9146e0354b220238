"""
Activity Logger

Every ledger mutation is logged and broadcast:
1. Structured local log (for debugging)
2. Change subscribers (UI refresh, tests)

The activity logger:
- Is synchronous, like the store that drives it
- Never lets a failing subscriber break the mutation that triggered it
"""

import logging
from typing import Callable, Optional

import structlog

from lentgreen.models.activity import ActivityEvent, ActivitySeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


Subscriber = Callable[[ActivityEvent], None]


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through the stdlib root logger at `level`."""
    logging.basicConfig(level=getattr(logging, level.upper()), format="%(message)s")


def get_logger(name: Optional[str] = None):
    """Return a structlog logger bound to the lentgreen namespace."""
    return structlog.get_logger(name or "lentgreen")


class ActivityLogger:
    """
    Central activity logging service.

    Logs events locally and forwards them to every subscriber.
    """

    def __init__(self):
        self._logger = get_logger("lentgreen.activity")
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a change listener.

        Returns a callable that removes the listener again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def log(self, event: ActivityEvent) -> None:
        """Log an event and notify subscribers."""
        log_dict = event.to_log_dict()

        if event.severity == ActivitySeverity.ERROR:
            self._logger.error("ledger_event", **log_dict)
        elif event.severity == ActivitySeverity.WARNING:
            self._logger.warning("ledger_event", **log_dict)
        elif event.severity == ActivitySeverity.DEBUG:
            self._logger.debug("ledger_event", **log_dict)
        else:
            self._logger.info("ledger_event", **log_dict)

        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "subscriber_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
