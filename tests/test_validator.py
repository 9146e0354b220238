"""Tests for LedgerValidator."""

from datetime import timedelta
from decimal import Decimal

from lentgreen.models.ledger import DebtStatus, DebtTemplate, Direction, Person
from lentgreen.validation import LedgerValidator

from tests.conftest import NOW, make_debt


class TestDebtValidation:
    """Status and remaining amount must agree."""

    def setup_method(self):
        self.validator = LedgerValidator()
        self.person = Person(name="Alex")

    def test_new_debt_is_valid(self):
        assert self.validator.validate_debt(make_debt(self.person)).is_valid

    def test_repaid_with_remaining_is_rejected(self):
        debt = make_debt(self.person, "1000").model_copy(update={"status": DebtStatus.REPAID})
        result = self.validator.validate_debt(debt)
        assert result.has_errors
        assert result.issues[0].field == "status"

    def test_partially_repaid_needs_remaining_strictly_between(self):
        debt = make_debt(self.person, "1000")
        full = debt.model_copy(update={"status": DebtStatus.PARTIALLY_REPAID})
        zero = full.model_copy(update={"remaining_amount": Decimal("0")})
        partial = full.model_copy(update={"remaining_amount": Decimal("400")})

        assert self.validator.validate_debt(full).has_errors
        assert self.validator.validate_debt(zero).has_errors
        assert self.validator.validate_debt(partial).is_valid

    def test_written_off_is_allowed_with_any_remaining(self):
        debt = make_debt(self.person).model_copy(update={"status": DebtStatus.WRITTEN_OFF})
        assert self.validator.validate_debt(debt).is_valid

    def test_blank_person_name_is_rejected(self):
        debt = make_debt(self.person).model_copy(update={"person_name": ""})
        assert self.validator.validate_debt(debt).has_errors

    def test_due_before_date_is_only_a_warning(self):
        debt = make_debt(self.person, due_date=NOW - timedelta(days=1))
        result = self.validator.validate_debt(debt)
        assert result.is_valid
        assert result.issues[0].severity == "warning"


class TestRepaymentValidation:

    def setup_method(self):
        self.validator = LedgerValidator()
        self.debt = make_debt(Person(name="Alex"), "1000")

    def test_positive_amount_is_valid(self):
        assert self.validator.validate_repayment(self.debt, Decimal("10")).is_valid

    def test_omitted_amount_is_valid(self):
        assert self.validator.validate_repayment(self.debt, None).is_valid

    def test_zero_and_negative_amounts_are_rejected(self):
        assert self.validator.validate_repayment(self.debt, Decimal("0")).has_errors
        assert self.validator.validate_repayment(self.debt, Decimal("-5")).has_errors

    def test_non_finite_amounts_are_rejected(self):
        assert self.validator.validate_repayment(self.debt, Decimal("NaN")).has_errors
        assert self.validator.validate_repayment(self.debt, Decimal("Infinity")).has_errors

    def test_written_off_debt_cannot_be_repaid(self):
        written_off = self.debt.model_copy(update={"status": DebtStatus.WRITTEN_OFF})
        result = self.validator.validate_repayment(written_off, None)
        assert result.issues[0].issue_type == "terminal_state"


class TestTemplateValidation:

    def test_template_with_name_is_valid(self):
        template = DebtTemplate(name="Lunch", direction=Direction.I_OWE)
        assert LedgerValidator().validate_template(template).is_valid
