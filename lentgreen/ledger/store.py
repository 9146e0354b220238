"""
Ledger Store

The single owner of all debts, people and templates.

DESIGN DECISION: The store is a plain synchronous object.
- Mutation methods validate, apply, persist, then notify the reminder
  scheduler and the activity logger
- Query methods are pure and delegate to lentgreen.queries
- Nothing raises for bad input or unknown ids; mutations return a
  MutationResult instead
- Persistence failures are logged and flagged, never raised

There is no locking. One store instance must only be driven from one
thread; a multi-session front end has to serialize calls itself.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional, Sequence, Union
from uuid import UUID

from lentgreen.activity import ActivityLogger, Subscriber
from lentgreen.config import AppSettings
from lentgreen.ledger.demo import demo_snapshot
from lentgreen.models.activity import ActivityEventBuilder, ActivityEventType
from lentgreen.models.ledger import (
    Debt,
    DebtStatus,
    DebtTemplate,
    Direction,
    LedgerSnapshot,
    Person,
)
from lentgreen.models.queries import (
    FilterType,
    SortOrder,
    StatsPeriod,
    TagAmount,
    TopPersonItem,
)
from lentgreen.models.results import MutationResult, ValidationIssue, ValidationResult
from lentgreen.queries import aggregations
from lentgreen.services.reminders import ReminderSchedulerInterface
from lentgreen.services.storage import LedgerStorageInterface, StorageError
from lentgreen.validation import LedgerValidator


Amount = Union[Decimal, int, float, str]


def _index_of(items: Sequence, entity_id: UUID) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == entity_id:
            return index
    return None


class LedgerStore:
    """
    In-memory debt ledger persisted after every mutation.

    Call load() once at startup before using the store.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        reminders: ReminderSchedulerInterface,
        activity_logger: Optional[ActivityLogger] = None,
        validator: Optional[LedgerValidator] = None,
        settings: Optional[AppSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._storage = storage
        self._reminders = reminders
        self._activity = activity_logger or ActivityLogger()
        self._validator = validator or LedgerValidator()
        self._settings = settings or AppSettings()
        self._clock = clock

        self._debts: list[Debt] = []
        self._people: list[Person] = []
        self._templates: list[DebtTemplate] = []
        self._persistence_degraded = False

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def debts(self) -> list[Debt]:
        return list(self._debts)

    @property
    def people(self) -> list[Person]:
        return list(self._people)

    @property
    def templates(self) -> list[DebtTemplate]:
        return list(self._templates)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def persistence_degraded(self) -> bool:
        """True while the last storage read or write failed."""
        return self._persistence_degraded

    def now(self) -> datetime:
        return self._clock()

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            debts=list(self._debts),
            people=list(self._people),
            templates=list(self._templates),
        )

    def get_debt(self, debt_id: UUID) -> Optional[Debt]:
        index = _index_of(self._debts, debt_id)
        return None if index is None else self._debts[index]

    def get_person(self, person_id: UUID) -> Optional[Person]:
        index = _index_of(self._people, person_id)
        return None if index is None else self._people[index]

    def find_person_by_name(self, name: str) -> Optional[Person]:
        """First person whose name matches case-insensitively."""
        needle = name.strip().casefold()
        for person in self._people:
            if person.name.casefold() == needle:
                return person
        return None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Get notified of every change; returns an unsubscribe callable."""
        return self._activity.subscribe(callback)

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def load(self) -> None:
        """
        Load persisted state at startup.

        Unreadable storage counts as empty. An empty ledger (no debts and
        no people) is seeded with demo data when enabled; the seed is
        only written back on the next mutation.
        """
        try:
            snapshot = self._storage.load()
        except StorageError as e:
            self._storage_failed("read", e)
            snapshot = LedgerSnapshot()

        self._debts = list(snapshot.debts)
        self._people = list(snapshot.people)
        self._templates = list(snapshot.templates)

        seeded = False
        if not self._debts and not self._people and self._settings.seed_demo_data:
            demo = demo_snapshot(self.now(), currency=self._settings.default_currency)
            self._debts = list(demo.debts)
            self._people = list(demo.people)
            seeded = True

        self._reminders.reschedule_all(self._debts)
        self._activity.log(ActivityEventBuilder.data_loaded(
            debt_count=len(self._debts),
            person_count=len(self._people),
            template_count=len(self._templates),
            seeded=seeded,
        ))

    def _persist(self) -> None:
        try:
            self._storage.save(self.snapshot())
        except StorageError as e:
            self._storage_failed("write", e)
            return
        self._persistence_degraded = False

    def _storage_failed(self, operation: str, error: Exception) -> None:
        self._persistence_degraded = True
        self._activity.log(ActivityEventBuilder.storage_failed(operation, str(error)))

    def _reject(
        self,
        operation: str,
        entity_id: Optional[UUID],
        issues: list[ValidationIssue],
    ) -> MutationResult:
        self._activity.log(ActivityEventBuilder.mutation_rejected(
            operation=operation,
            entity_id=entity_id,
            issues=[issue.model_dump() for issue in issues],
        ))
        return MutationResult.rejected(entity_id, issues)

    def _check(
        self,
        operation: str,
        entity_id: UUID,
        validation: ValidationResult,
    ) -> Optional[MutationResult]:
        """Rejected result if validation found errors, else None."""
        if validation.has_errors:
            return self._reject(operation, entity_id, validation.issues)
        return None

    def _debt_event(self, event_type: ActivityEventType, debt: Debt) -> None:
        self._activity.log(ActivityEventBuilder.debt_changed(
            event_type=event_type,
            debt_id=debt.id,
            person_name=debt.person_name,
            remaining=debt.remaining_amount,
            status=debt.status.value,
        ))

    # =========================================================================
    # PEOPLE
    # =========================================================================

    def add_person(self, person: Person) -> MutationResult:
        """Append a person. Duplicate names are fine, duplicate ids are not."""
        if _index_of(self._people, person.id) is not None:
            return self._reject("add_person", person.id, [ValidationIssue(
                field="id",
                issue_type="duplicate_id",
                message=f"Person {person.id} already exists",
            )])
        rejected = self._check("add_person", person.id, self._validator.validate_person(person))
        if rejected:
            return rejected

        self._people.append(person)
        self._persist()
        self._activity.log(ActivityEventBuilder.person_changed(
            ActivityEventType.PERSON_ADDED, person.id, person.name,
        ))
        return MutationResult.ok(person.id)

    def update_person(self, person: Person) -> MutationResult:
        """Replace a person and copy the new name onto all of their debts."""
        index = _index_of(self._people, person.id)
        if index is None:
            return MutationResult.not_found(person.id)
        rejected = self._check("update_person", person.id, self._validator.validate_person(person))
        if rejected:
            return rejected

        self._people[index] = person

        # Keep the denormalized person_name on debts in sync
        renamed = []
        for i, debt in enumerate(self._debts):
            if debt.person_id == person.id and debt.person_name != person.name:
                self._debts[i] = debt.model_copy(update={"person_name": person.name})
                renamed.append(self._debts[i])

        self._persist()
        for debt in renamed:
            self._reminders.schedule(debt)
        self._activity.log(ActivityEventBuilder.person_changed(
            ActivityEventType.PERSON_UPDATED, person.id, person.name,
            details={"debts_renamed": len(renamed)},
        ))
        return MutationResult.ok(person.id)

    def delete_person(self, person: Person) -> MutationResult:
        """Remove a person together with every debt that references them."""
        index = _index_of(self._people, person.id)
        if index is None:
            return MutationResult.not_found(person.id)

        removed = self._people.pop(index)
        orphaned = [debt for debt in self._debts if debt.person_id == person.id]
        self._debts = [debt for debt in self._debts if debt.person_id != person.id]

        for debt in orphaned:
            self._reminders.cancel(debt.id)
        self._persist()
        self._activity.log(ActivityEventBuilder.person_changed(
            ActivityEventType.PERSON_DELETED, removed.id, removed.name,
            details={"debts_deleted": len(orphaned)},
        ))
        return MutationResult.ok(person.id)

    # =========================================================================
    # DEBTS
    # =========================================================================

    def add_debt(self, debt: Debt) -> MutationResult:
        if _index_of(self._debts, debt.id) is not None:
            return self._reject("add_debt", debt.id, [ValidationIssue(
                field="id",
                issue_type="duplicate_id",
                message=f"Debt {debt.id} already exists",
            )])
        rejected = self._check("add_debt", debt.id, self._validator.validate_debt(debt))
        if rejected:
            return rejected

        self._debts.append(debt)
        self._persist()
        self._reminders.schedule(debt)
        self._debt_event(ActivityEventType.DEBT_ADDED, debt)
        return MutationResult.ok(debt.id)

    def update_debt(self, debt: Debt) -> MutationResult:
        """
        Replace a debt wholesale.

        Edits may set any status that agrees with the remaining amount;
        this is how debts get written off or corrected.
        """
        index = _index_of(self._debts, debt.id)
        if index is None:
            return MutationResult.not_found(debt.id)
        rejected = self._check("update_debt", debt.id, self._validator.validate_debt(debt))
        if rejected:
            return rejected

        self._debts[index] = debt
        self._persist()
        self._reminders.schedule(debt)
        self._debt_event(ActivityEventType.DEBT_UPDATED, debt)
        return MutationResult.ok(debt.id)

    def delete_debt(self, debt: Debt) -> MutationResult:
        index = _index_of(self._debts, debt.id)
        if index is None:
            return MutationResult.not_found(debt.id)

        self._reminders.cancel(debt.id)
        removed = self._debts.pop(index)
        self._persist()
        self._debt_event(ActivityEventType.DEBT_DELETED, removed)
        return MutationResult.ok(debt.id)

    def mark_as_repaid(
        self,
        debt: Debt,
        amount: Optional[Amount] = None,
    ) -> MutationResult:
        """
        Record a repayment.

        No amount, or an amount covering the remaining balance, repays the
        debt in full. A smaller positive amount leaves it partially repaid.
        Non-positive or non-numeric amounts and written-off debts are
        rejected untouched.
        """
        index = _index_of(self._debts, debt.id)
        if index is None:
            return MutationResult.not_found(debt.id)

        current = self._debts[index]
        if amount is not None and not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount).strip())
            except InvalidOperation:
                return self._reject("mark_as_repaid", debt.id, [ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message=f"Repayment amount is not a number: {amount!r}",
                )])
        rejected = self._check(
            "mark_as_repaid", debt.id, self._validator.validate_repayment(current, amount),
        )
        if rejected:
            return rejected

        if amount is not None and amount < current.remaining_amount:
            updated = current.model_copy(update={
                "remaining_amount": current.remaining_amount - amount,
                "status": DebtStatus.PARTIALLY_REPAID,
            })
            event_type = ActivityEventType.DEBT_PARTIALLY_REPAID
        else:
            updated = current.model_copy(update={
                "remaining_amount": Decimal("0"),
                "status": DebtStatus.REPAID,
            })
            event_type = ActivityEventType.DEBT_REPAID

        self._debts[index] = updated
        self._persist()
        self._reminders.cancel(debt.id)
        self._debt_event(event_type, updated)
        return MutationResult.ok(debt.id)

    # =========================================================================
    # TEMPLATES
    # =========================================================================

    def add_template(self, template: DebtTemplate) -> MutationResult:
        if _index_of(self._templates, template.id) is not None:
            return self._reject("add_template", template.id, [ValidationIssue(
                field="id",
                issue_type="duplicate_id",
                message=f"Template {template.id} already exists",
            )])
        rejected = self._check(
            "add_template", template.id, self._validator.validate_template(template),
        )
        if rejected:
            return rejected

        self._templates.append(template)
        self._persist()
        self._activity.log(ActivityEventBuilder.template_changed(
            ActivityEventType.TEMPLATE_ADDED, template.id, template.name,
        ))
        return MutationResult.ok(template.id)

    def update_template(self, template: DebtTemplate) -> MutationResult:
        index = _index_of(self._templates, template.id)
        if index is None:
            return MutationResult.not_found(template.id)
        rejected = self._check(
            "update_template", template.id, self._validator.validate_template(template),
        )
        if rejected:
            return rejected

        self._templates[index] = template
        self._persist()
        self._activity.log(ActivityEventBuilder.template_changed(
            ActivityEventType.TEMPLATE_UPDATED, template.id, template.name,
        ))
        return MutationResult.ok(template.id)

    def delete_template(self, template: DebtTemplate) -> MutationResult:
        index = _index_of(self._templates, template.id)
        if index is None:
            return MutationResult.not_found(template.id)

        removed = self._templates.pop(index)
        self._persist()
        self._activity.log(ActivityEventBuilder.template_changed(
            ActivityEventType.TEMPLATE_DELETED, removed.id, removed.name,
        ))
        return MutationResult.ok(template.id)

    # =========================================================================
    # RESET
    # =========================================================================

    def reset_all_data(self) -> MutationResult:
        """Drop everything, cancel all reminders and persist the empty ledger."""
        self._reminders.reschedule_all([])
        self._debts = []
        self._people = []
        self._templates = []
        self._persist()
        self._activity.log(ActivityEventBuilder.data_reset())
        return MutationResult.ok()

    # =========================================================================
    # QUERIES
    # =========================================================================

    def filtered_debts(
        self,
        filter_type: FilterType = FilterType.ALL,
        search_text: str = "",
        sort_order: SortOrder = SortOrder.DATE_DESC,
    ) -> list[Debt]:
        return aggregations.filter_debts(self._debts, filter_type, search_text, sort_order)

    def recent_people(self) -> list[Person]:
        return aggregations.recent_people(
            self._debts, self._people, window=self._settings.recent_people_window,
        )

    def active_debts(self) -> list[Debt]:
        return aggregations.open_debts(self._debts)

    def repaid_debts(self) -> list[Debt]:
        return aggregations.repaid_debts(self._debts)

    def total_owed_to_me(self) -> Decimal:
        return aggregations.total_remaining(self._debts, Direction.OWED_TO_ME)

    def total_i_owe(self) -> Decimal:
        return aggregations.total_remaining(self._debts, Direction.I_OWE)

    def net_balance(self) -> Decimal:
        return aggregations.net_balance(self._debts)

    def total_repaid(self) -> Decimal:
        return aggregations.total_repaid(self._debts)

    def debts_for_person(self, person_id: UUID) -> list[Debt]:
        return [debt for debt in self._debts if debt.person_id == person_id]

    def total_for_person(self, person_id: UUID) -> Decimal:
        return aggregations.total_for_person(self._debts, person_id)

    def debts_due_soon(self, days: Optional[int] = None) -> list[Debt]:
        if days is None:
            days = self._settings.due_soon_days
        return aggregations.debts_due_soon(self._debts, self.now(), days)

    def recent_debts(self, limit: int = 5) -> list[Debt]:
        return aggregations.recent_debts(self._debts, limit)

    def debts_in_period(self, period: StatsPeriod) -> list[Debt]:
        return aggregations.debts_in_period(self._debts, period, self.now())

    def total_repaid_in_period(self, period: StatsPeriod) -> Decimal:
        return aggregations.total_repaid(self.debts_in_period(period))

    def total_owed_to_me_in_period(self, period: StatsPeriod) -> Decimal:
        return aggregations.total_remaining(self.debts_in_period(period), Direction.OWED_TO_ME)

    def total_i_owe_in_period(self, period: StatsPeriod) -> Decimal:
        return aggregations.total_remaining(self.debts_in_period(period), Direction.I_OWE)

    def breakdown_by_tag(self, period: StatsPeriod = StatsPeriod.ALL) -> list[TagAmount]:
        return aggregations.breakdown_by_tag(self.debts_in_period(period))

    def top_people(
        self,
        period: StatsPeriod = StatsPeriod.ALL,
        limit: int = 5,
    ) -> list[TopPersonItem]:
        return aggregations.top_people(self.debts_in_period(period), limit)

    def format_balance(self, value: Decimal, currency: Optional[str] = None) -> str:
        return aggregations.format_balance(value, currency or self._settings.default_currency)
