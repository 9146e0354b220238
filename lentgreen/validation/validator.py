"""
Ledger Validation

Pydantic already rejects structurally broken records (negative amounts,
remaining above amount, blank person names) when they are constructed.
This validator covers the rules that span several fields or depend on
the store's current state:

- Status / remaining-amount consistency
- Blank denormalized person names on debts
- Repayment amounts
- Template names

IMPORTANT: Validation NEVER fixes anything.
It reports issues; the store turns error-level issues into a rejected
MutationResult and leaves its state untouched.
"""

from decimal import Decimal
from typing import Optional

from lentgreen.models.ledger import Debt, DebtStatus, DebtTemplate, Person
from lentgreen.models.results import ValidationIssue, ValidationResult


class LedgerValidator:
    """Validates entities and repayments before they reach the store."""

    def validate_person(self, person: Person) -> ValidationResult:
        issues = []
        if not person.name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Person name is required",
            ))
        return ValidationResult(issues=issues)

    def _validate_status(self, debt: Debt) -> list[ValidationIssue]:
        """Check that status and remaining amount agree."""
        issues = []

        if debt.status == DebtStatus.REPAID and debt.remaining_amount != 0:
            issues.append(ValidationIssue(
                field="status",
                issue_type="inconsistent",
                message="A repaid debt must have nothing remaining",
            ))

        if debt.status == DebtStatus.PARTIALLY_REPAID and not (
            0 < debt.remaining_amount < debt.amount
        ):
            issues.append(ValidationIssue(
                field="status",
                issue_type="inconsistent",
                message=(
                    "A partially repaid debt must have a remaining amount "
                    "between zero and the original amount"
                ),
            ))

        return issues

    def validate_debt(self, debt: Debt) -> ValidationResult:
        """
        Validate a debt for add or whole-record update.

        Any status is allowed as long as it agrees with the remaining
        amount; edits are the escape hatch around the repayment rules.
        """
        issues = []

        if not debt.person_name.strip():
            issues.append(ValidationIssue(
                field="person_name",
                issue_type="missing",
                message="Debt must name a person",
            ))

        if debt.amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
            ))

        issues.extend(self._validate_status(debt))

        if debt.due_date and debt.due_date < debt.date:
            issues.append(ValidationIssue(
                field="due_date",
                issue_type="inconsistent",
                message="Due date is before the debt date",
                severity="warning",
            ))

        return ValidationResult(issues=issues)

    def validate_repayment(
        self,
        debt: Debt,
        amount: Optional[Decimal],
    ) -> ValidationResult:
        """
        Validate a repayment against the stored debt.

        Omitted amount means "repay in full" and is always valid for an
        open or already repaid debt.
        """
        issues = []

        if amount is not None and not amount.is_finite():
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Repayment amount must be a finite number, got {amount}",
            ))
        elif amount is not None and amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message=f"Repayment amount must be positive, got {amount}",
            ))

        if debt.status == DebtStatus.WRITTEN_OFF:
            issues.append(ValidationIssue(
                field="status",
                issue_type="terminal_state",
                message="A written-off debt cannot be repaid",
            ))

        return ValidationResult(issues=issues)

    def validate_template(self, template: DebtTemplate) -> ValidationResult:
        issues = []
        if not template.name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Template name is required",
            ))
        return ValidationResult(issues=issues)
