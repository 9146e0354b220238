"""Activity logging package."""

from lentgreen.activity.logger import (
    ActivityLogger,
    Subscriber,
    configure_logging,
    get_logger,
)

__all__ = ["ActivityLogger", "Subscriber", "configure_logging", "get_logger"]
