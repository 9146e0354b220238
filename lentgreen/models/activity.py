"""
Activity Models for LentGreen

Every store mutation produces one ActivityEvent. Events are written to
the structured log and handed to change subscribers (the presentation
layer re-queries the store when it receives one).

Events are not persisted: there is no history or undo.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events the ledger emits."""
    # People
    PERSON_ADDED = "person_added"
    PERSON_UPDATED = "person_updated"
    PERSON_DELETED = "person_deleted"

    # Debts
    DEBT_ADDED = "debt_added"
    DEBT_UPDATED = "debt_updated"
    DEBT_DELETED = "debt_deleted"
    DEBT_REPAID = "debt_repaid"
    DEBT_PARTIALLY_REPAID = "debt_partially_repaid"

    # Templates
    TEMPLATE_ADDED = "template_added"
    TEMPLATE_UPDATED = "template_updated"
    TEMPLATE_DELETED = "template_deleted"

    # Whole-store events
    DATA_LOADED = "data_loaded"
    DEMO_DATA_SEEDED = "demo_data_seeded"
    DATA_RESET = "data_reset"

    # Failures
    MUTATION_REJECTED = "mutation_rejected"
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single thing that happened to the ledger."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=datetime.now)

    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'debt', 'person', 'template')"
    )
    entity_id: Optional[UUID] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.debt_added(debt_id, person_name, amount)
        event = ActivityEventBuilder.storage_failed("write", error)
    """

    @staticmethod
    def person_changed(
        event_type: ActivityEventType,
        person_id: UUID,
        name: str,
        details: Optional[dict] = None,
    ) -> ActivityEvent:
        verb = event_type.value.split("_", 1)[1]
        return ActivityEvent(
            event_type=event_type,
            entity_type="person",
            entity_id=person_id,
            description=f"Person {verb}: {name}",
            details={"name": name, **(details or {})},
        )

    @staticmethod
    def debt_changed(
        event_type: ActivityEventType,
        debt_id: UUID,
        person_name: str,
        remaining: Decimal,
        status: str,
    ) -> ActivityEvent:
        verb = event_type.value.split("_", 1)[1].replace("_", " ")
        return ActivityEvent(
            event_type=event_type,
            entity_type="debt",
            entity_id=debt_id,
            description=f"Debt {verb}: {person_name} ({remaining} remaining)",
            details={
                "person_name": person_name,
                "remaining_amount": str(remaining),
                "status": status,
            },
        )

    @staticmethod
    def template_changed(
        event_type: ActivityEventType,
        template_id: UUID,
        name: str,
    ) -> ActivityEvent:
        verb = event_type.value.split("_", 1)[1]
        return ActivityEvent(
            event_type=event_type,
            entity_type="template",
            entity_id=template_id,
            description=f"Template {verb}: {name}",
            details={"name": name},
        )

    @staticmethod
    def data_loaded(
        debt_count: int,
        person_count: int,
        template_count: int,
        seeded: bool,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=(
                ActivityEventType.DEMO_DATA_SEEDED
                if seeded
                else ActivityEventType.DATA_LOADED
            ),
            description=(
                f"Ledger loaded: {debt_count} debts, "
                f"{person_count} people, {template_count} templates"
            ),
            details={
                "debts": debt_count,
                "people": person_count,
                "templates": template_count,
                "seeded": seeded,
            },
        )

    @staticmethod
    def data_reset() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DATA_RESET,
            severity=ActivitySeverity.WARNING,
            description="All ledger data cleared",
        )

    @staticmethod
    def mutation_rejected(
        operation: str,
        entity_id: Optional[UUID],
        issues: list[dict],
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.MUTATION_REJECTED,
            severity=ActivitySeverity.WARNING,
            entity_id=entity_id,
            description=f"{operation} rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def storage_failed(
        operation: str,
        error_message: str,
    ) -> ActivityEvent:
        event_type = (
            ActivityEventType.STORAGE_READ_FAILED
            if operation == "read"
            else ActivityEventType.STORAGE_WRITE_FAILED
        )
        return ActivityEvent(
            event_type=event_type,
            severity=ActivitySeverity.ERROR,
            description=f"Storage {operation} failed",
            error_message=error_message,
            details={"operation": operation},
        )
