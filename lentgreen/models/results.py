"""
Validation and Mutation Result Models

DESIGN DECISION: Store mutations never raise for bad input or unknown ids.
They return a MutationResult instead, so callers (and tests) can see
exactly what happened without wrapping every call in try/except.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'inconsistent')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one entity before it enters the store."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors


class MutationStatus(str, Enum):
    """What a store mutation did."""
    APPLIED = "applied"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


class MutationResult(BaseModel):
    """Returned by every store mutation."""

    status: MutationStatus
    entity_id: Optional[UUID] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.status == MutationStatus.APPLIED

    @classmethod
    def ok(cls, entity_id: Optional[UUID] = None) -> 'MutationResult':
        return cls(status=MutationStatus.APPLIED, entity_id=entity_id)

    @classmethod
    def not_found(cls, entity_id: UUID) -> 'MutationResult':
        return cls(status=MutationStatus.NOT_FOUND, entity_id=entity_id)

    @classmethod
    def rejected(
        cls,
        entity_id: Optional[UUID],
        issues: list[ValidationIssue],
    ) -> 'MutationResult':
        return cls(
            status=MutationStatus.REJECTED,
            entity_id=entity_id,
            issues=issues,
        )
