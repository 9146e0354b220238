"""
Tests for LentGreen models

Test strategy:
1. Unit tests for individual components (models, validator, queries)
2. Store tests against in-memory storage and a local reminder scheduler
3. No real time, no real disk except where a test asks for tmp_path
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from lentgreen.models.ledger import (
    Debt,
    DebtStatus,
    DebtTemplate,
    Direction,
    LedgerSnapshot,
    Person,
)
from lentgreen.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from lentgreen.models.results import (
    MutationResult,
    MutationStatus,
    ValidationIssue,
    ValidationResult,
)

from tests.conftest import NOW, make_debt


class TestPerson:
    """Tests for the Person model."""

    def test_person_strips_whitespace(self):
        """Test that whitespace is stripped from the name."""
        person = Person(name="  Alex  ")
        assert person.name == "Alex"

    def test_person_rejects_blank_name(self):
        """Test that a name of only whitespace is rejected."""
        with pytest.raises(ValueError):
            Person(name="   ")

    def test_person_ids_are_unique(self):
        assert Person(name="Alex").id != Person(name="Alex").id

    def test_person_is_frozen(self):
        person = Person(name="Alex")
        with pytest.raises(ValueError):
            person.name = "Bob"


class TestDebt:
    """Tests for the Debt model."""

    def test_create_starts_active_with_full_remaining(self):
        debt = make_debt(Person(name="Alex"), amount="5000")
        assert debt.status == DebtStatus.ACTIVE
        assert debt.remaining_amount == Decimal("5000")
        assert debt.person_name == "Alex"
        assert debt.currency == "₽"

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            make_debt(Person(name="Alex"), amount="-100")

    def test_rejects_remaining_above_amount(self):
        with pytest.raises(ValueError, match="Remaining amount cannot exceed amount"):
            Debt(
                person_id=uuid4(),
                person_name="Alex",
                direction=Direction.I_OWE,
                amount=Decimal("100"),
                remaining_amount=Decimal("150"),
                date=NOW,
            )

    def test_tags_are_an_ordered_set(self):
        debt = make_debt(Person(name="Alex"), tags=["food", " friends ", "food", ""])
        assert debt.tags == ("food", "friends")

    def test_progress(self):
        debt = make_debt(Person(name="Alex"), amount="5000").model_copy(
            update={"remaining_amount": Decimal("3000")}
        )
        assert debt.progress == Decimal("0.4")

    def test_progress_of_zero_amount_debt_is_zero(self):
        debt = make_debt(Person(name="Alex"), amount="0")
        assert debt.progress == 0

    def test_signed_remaining(self):
        person = Person(name="Alex")
        assert make_debt(person, "300").signed_remaining == Decimal("300")
        assert make_debt(person, "300", Direction.I_OWE).signed_remaining == Decimal("-300")

    def test_open_statuses(self):
        assert DebtStatus.ACTIVE.is_open
        assert DebtStatus.PARTIALLY_REPAID.is_open
        assert not DebtStatus.REPAID.is_open
        assert not DebtStatus.WRITTEN_OFF.is_open

    def test_due_date_is_optional(self):
        debt = make_debt(Person(name="Alex"), due_date=NOW + timedelta(days=3))
        assert debt.due_date == NOW + timedelta(days=3)
        assert make_debt(Person(name="Alex")).due_date is None


class TestDebtTemplate:
    """Tests for the DebtTemplate model."""

    def test_template_defaults(self):
        template = DebtTemplate(name="Coffee", direction=Direction.OWED_TO_ME)
        assert template.person_name is None
        assert template.currency == "₽"
        assert template.tags == ()

    def test_template_rejects_blank_name(self):
        with pytest.raises(ValueError):
            DebtTemplate(name=" ", direction=Direction.I_OWE)


class TestLedgerSnapshot:

    def test_empty_snapshot(self):
        assert LedgerSnapshot().is_empty is True
        assert LedgerSnapshot(people=[Person(name="Alex")]).is_empty is False


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        event = ActivityEvent(
            event_type=ActivityEventType.DEBT_ADDED,
            description="Debt added",
        )
        assert event.severity == ActivitySeverity.INFO

    def test_activity_event_to_log_dict(self):
        event = ActivityEvent(
            event_type=ActivityEventType.PERSON_ADDED,
            description="Person added: Alex",
            details={"name": "Alex"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "person_added"
        assert log_dict["details"]["name"] == "Alex"

    def test_builder_debt_changed(self):
        debt_id = uuid4()
        event = ActivityEventBuilder.debt_changed(
            event_type=ActivityEventType.DEBT_PARTIALLY_REPAID,
            debt_id=debt_id,
            person_name="Alex",
            remaining=Decimal("3000"),
            status="partially_repaid",
        )
        assert event.entity_type == "debt"
        assert event.entity_id == debt_id
        assert "partially repaid" in event.description
        assert event.details["remaining_amount"] == "3000"

    def test_builder_storage_failed(self):
        event = ActivityEventBuilder.storage_failed("read", "disk gone")
        assert event.event_type == ActivityEventType.STORAGE_READ_FAILED
        assert event.severity == ActivitySeverity.ERROR
        assert event.error_message == "disk gone"


class TestResults:
    """Tests for validation and mutation results."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="amount", issue_type="invalid_value", message="bad"),
        ])
        assert result.has_errors is True
        assert result.is_valid is False

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="due_date",
                issue_type="inconsistent",
                message="Due before date",
                severity="warning",
            ),
        ])
        assert result.has_errors is False
        assert result.is_valid is True

    def test_mutation_result_constructors(self):
        entity_id = uuid4()
        assert MutationResult.ok(entity_id).applied is True
        assert MutationResult.not_found(entity_id).status == MutationStatus.NOT_FOUND
        rejected = MutationResult.rejected(entity_id, [])
        assert rejected.status == MutationStatus.REJECTED
        assert rejected.applied is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
