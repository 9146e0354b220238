"""
Main Orchestrator for LentGreen

This module ties the components together and defines the entry flows
that sit between a form and the ledger store:
1. Quick add (name + amount, nothing else)
2. Full add / edit (every debt field, person resolved by name)
3. Add from template (preset direction, currency, tags, person)

DESIGN DECISION: Flows turn raw form input into models.
Anything the models refuse to build comes back as a rejected
MutationResult, exactly like a rejection from the store itself, so a
form only ever has one kind of outcome to display.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from lentgreen.activity import ActivityLogger, configure_logging, get_logger
from lentgreen.config import AppSettings, get_settings
from lentgreen.ledger import LedgerStore
from lentgreen.models.ledger import Debt, DebtStatus, DebtTemplate, Direction, Person
from lentgreen.models.results import MutationResult, ValidationIssue
from lentgreen.services.reminders import LocalReminderScheduler, ReminderSchedulerInterface
from lentgreen.services.storage import LedgerStorageInterface, create_storage


def _issues_from_error(error: ValidationError) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            field=".".join(str(part) for part in err["loc"]) or "debt",
            issue_type=err["type"],
            message=err["msg"],
        )
        for err in error.errors()
    ]


class DebtEntryFlow:
    """
    Creates and edits debts from form input.

    Person resolution:
    - quick add creates a new person unless one is handed in
    - full add / edit / template reuse an existing person whose name
      matches case-insensitively, and create one otherwise

    A new person is only stored together with the debt; if the store
    rejects the debt, the person is removed again.
    """

    def __init__(self, store: LedgerStore):
        self._store = store
        self._logger = get_logger("lentgreen.entry")

    @property
    def default_currency(self) -> str:
        return self._store.settings.default_currency

    def _rejected(self, operation: str, issues: list[ValidationIssue]) -> MutationResult:
        self._logger.warning(
            "entry_rejected",
            operation=operation,
            issues=[issue.message for issue in issues],
        )
        return MutationResult.rejected(None, issues)

    def _resolve_person(self, name: str) -> tuple[Person, bool]:
        """
        Existing person matching `name`, or a new unsaved one.

        Returns (person, is_new). Raises ValidationError for names the
        Person model refuses.
        """
        existing = self._store.find_person_by_name(name)
        if existing is not None:
            return existing, False
        return Person(name=name), True

    def _commit(
        self,
        person: Person,
        is_new: bool,
        apply: Callable[[Debt], MutationResult],
        debt: Debt,
    ) -> MutationResult:
        if is_new:
            result = self._store.add_person(person)
            if not result.applied:
                return result

        result = apply(debt)
        if not result.applied and is_new:
            self._store.delete_person(person)
            self._logger.info("new_person_discarded", person_id=str(person.id))
        return result

    def quick_add(
        self,
        amount: Decimal,
        direction: Direction,
        person_name: str = "",
        person: Optional[Person] = None,
    ) -> MutationResult:
        """
        Record an active debt dated now with only a person and an amount.

        The amount must be positive. A given person is added to the
        store first if it is not there yet.
        """
        name = person.name if person is not None else person_name.strip()
        issues = []
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))
        if not name:
            issues.append(ValidationIssue(
                field="person_name",
                issue_type="missing",
                message="Person name is required",
            ))
        if issues:
            return self._rejected("quick_add", issues)

        try:
            if person is None:
                person, is_new = Person(name=name), True
            else:
                is_new = self._store.get_person(person.id) is None
            debt = Debt.create(
                person=person,
                direction=direction,
                amount=amount,
                date=self._store.now(),
                currency=self.default_currency,
            )
        except ValidationError as e:
            return self._rejected("quick_add", _issues_from_error(e))
        return self._commit(person, is_new, self._store.add_debt, debt)

    def add_debt(
        self,
        person_name: str,
        amount: Decimal,
        direction: Direction,
        currency: Optional[str] = None,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
        due_date: Optional[datetime] = None,
        tags: Iterable[str] = (),
        notes: str = "",
    ) -> MutationResult:
        """Full add form: a new active debt with nothing repaid yet."""
        name = person_name.strip()
        issues = self._check_form(name, amount)
        if issues:
            return self._rejected("add_debt", issues)

        try:
            person, is_new = self._resolve_person(name)
            debt = Debt.create(
                person=person,
                direction=direction,
                amount=amount,
                date=date or self._store.now(),
                currency=currency or self.default_currency,
                description=description or None,
                due_date=due_date,
                tags=tuple(tags),
                notes=notes,
            )
        except ValidationError as e:
            return self._rejected("add_debt", _issues_from_error(e))
        return self._commit(person, is_new, self._store.add_debt, debt)

    def edit_debt(
        self,
        existing: Debt,
        person_name: str,
        amount: Decimal,
        remaining_amount: Decimal,
        direction: Direction,
        status: DebtStatus,
        currency: Optional[str] = None,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
        due_date: Optional[datetime] = None,
        tags: Iterable[str] = (),
        notes: str = "",
    ) -> MutationResult:
        """Full edit form: replaces every field except id and creation date."""
        name = person_name.strip()
        issues = self._check_form(name, amount)
        if issues:
            return self._rejected("edit_debt", issues)

        try:
            person, is_new = self._resolve_person(name)
            debt = Debt(
                id=existing.id,
                creation_date=existing.creation_date,
                person_id=person.id,
                person_name=person.name,
                direction=direction,
                amount=amount,
                remaining_amount=remaining_amount,
                currency=currency or existing.currency,
                description=description or None,
                date=date or existing.date,
                due_date=due_date,
                status=status,
                tags=tuple(tags),
                notes=notes,
            )
        except ValidationError as e:
            return self._rejected("edit_debt", _issues_from_error(e))
        return self._commit(person, is_new, self._store.update_debt, debt)

    def add_from_template(
        self,
        template: DebtTemplate,
        amount: Decimal,
        person_name: Optional[str] = None,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
        due_date: Optional[datetime] = None,
    ) -> MutationResult:
        """
        Add a debt preset by a template.

        The template stays in the store; an explicit person name
        overrides the template's default person.
        """
        return self.add_debt(
            person_name=person_name or template.person_name or "",
            amount=amount,
            direction=template.direction,
            currency=template.currency,
            description=description,
            date=date,
            due_date=due_date,
            tags=template.tags,
        )

    @staticmethod
    def _check_form(name: str, amount: Optional[Decimal]) -> list[ValidationIssue]:
        issues = []
        if not name:
            issues.append(ValidationIssue(
                field="person_name",
                issue_type="missing",
                message="Person name is required",
            ))
        if amount is None or amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
            ))
        return issues


def create_app_components(
    storage: Optional[LedgerStorageInterface] = None,
    reminders: Optional[ReminderSchedulerInterface] = None,
    app_settings: Optional[AppSettings] = None,
) -> tuple[LedgerStore, DebtEntryFlow]:
    """
    Factory function to create all application components.

    Args:
        storage: Persistence backend. Defaults to the configured one.
        reminders: Reminder scheduler. Defaults to a local scheduler
                   using the configured reminder settings.
        app_settings: Overrides the environment-derived app settings.

    Returns:
        (store, entry_flow), with the store already loaded
    """
    settings = get_settings()
    app_settings = app_settings or settings.app
    configure_logging(app_settings.log_level)

    store = LedgerStore(
        storage=storage or create_storage(settings.storage),
        reminders=reminders or LocalReminderScheduler(settings.reminders),
        activity_logger=ActivityLogger(),
        settings=app_settings,
    )
    store.load()

    return store, DebtEntryFlow(store)
