"""Tests for the key-value storage adapters."""

import json
from datetime import timedelta
from decimal import Decimal

import pytest

from lentgreen.config import StorageSettings
from lentgreen.models.ledger import (
    DebtStatus,
    DebtTemplate,
    Direction,
    LedgerSnapshot,
    Person,
)
from lentgreen.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageReadError,
    StorageWriteError,
    create_storage,
)

from tests.conftest import NOW, make_debt


def full_snapshot() -> LedgerSnapshot:
    alex = Person(name="Alex", phone="+7 900 000 00 00", email="alex@example.com")
    maria = Person(name="Maria")
    partial = make_debt(
        alex,
        "5000",
        description="Lunch",
        due_date=NOW + timedelta(days=7),
        tags=["food", "friends"],
        notes="pay by card",
    ).model_copy(update={
        "remaining_amount": Decimal("3000"),
        "status": DebtStatus.PARTIALLY_REPAID,
    })
    owed = make_debt(maria, "1250.50", Direction.I_OWE, currency="€")
    template = DebtTemplate(
        name="Coffee",
        person_name="Maria",
        direction=Direction.I_OWE,
        tags=["food"],
    )
    return LedgerSnapshot(debts=[partial, owed], people=[alex, maria], templates=[template])


class TestInMemoryStorage:

    def test_round_trip_reproduces_every_field(self):
        storage = InMemoryLedgerStorage()
        snapshot = full_snapshot()
        storage.save(snapshot)
        assert storage.load() == snapshot

    def test_three_independent_keys(self):
        storage = InMemoryLedgerStorage()
        storage.save(full_snapshot())
        assert set(storage.values) == {
            "lentgreen_debts",
            "lentgreen_people",
            "lentgreen_templates",
        }

    def test_empty_storage_loads_empty(self):
        assert InMemoryLedgerStorage().load().is_empty

    def test_custom_keys(self):
        storage = InMemoryLedgerStorage(StorageSettings(debts_key="d", people_key="p", templates_key="t"))
        storage.save(LedgerSnapshot())
        assert set(storage.values) == {"d", "p", "t"}

    def test_corrupt_record_raises_read_error(self):
        storage = InMemoryLedgerStorage()
        storage.values["lentgreen_debts"] = "{not json"
        with pytest.raises(StorageReadError):
            storage.load()

    def test_missing_fields_default_and_unknown_fields_are_ignored(self):
        storage = InMemoryLedgerStorage()
        person = Person(name="Alex")
        storage.values["lentgreen_debts"] = json.dumps([{
            "person_id": str(person.id),
            "person_name": "Alex",
            "direction": "owed_to_me",
            "amount": 100,
            "remaining_amount": 40,
            "date": NOW.isoformat(),
            "legacy_field": "ignored",
        }])

        debt = storage.load().debts[0]

        assert debt.remaining_amount == Decimal("40")
        assert debt.status == DebtStatus.ACTIVE
        assert debt.tags == ()
        assert debt.notes == ""
        assert debt.currency == "₽"


class TestJsonFileStorage:

    def test_round_trip_on_disk(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path / "ledger")
        snapshot = full_snapshot()
        storage.save(snapshot)

        reloaded = JsonFileLedgerStorage(data_dir=tmp_path / "ledger").load()
        assert reloaded == snapshot

    def test_one_file_per_key(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        storage.save(full_snapshot())
        names = sorted(path.name for path in tmp_path.iterdir())
        assert names == [
            "lentgreen_debts.json",
            "lentgreen_people.json",
            "lentgreen_templates.json",
        ]

    def test_missing_directory_loads_empty(self, tmp_path):
        assert JsonFileLedgerStorage(data_dir=tmp_path / "nope").load().is_empty

    def test_corrupt_file_raises_read_error(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        storage.path_for("lentgreen_people").write_text("[{]", encoding="utf-8")
        with pytest.raises(StorageReadError):
            storage.load()

    def test_undecodable_file_raises_read_error(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        storage.path_for("lentgreen_debts").write_bytes(b"\xff\xfe[")
        with pytest.raises(StorageReadError):
            storage.load()

    def test_unwritable_location_raises_write_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileLedgerStorage(data_dir=blocker / "ledger")
        with pytest.raises(StorageWriteError):
            storage.save(LedgerSnapshot())


class TestCreateStorage:

    def test_memory_backend(self):
        assert isinstance(create_storage(StorageSettings(backend="memory")), InMemoryLedgerStorage)

    def test_json_file_backend(self, tmp_path):
        storage = create_storage(StorageSettings(backend="json_file", data_dir=tmp_path))
        assert isinstance(storage, JsonFileLedgerStorage)
        assert storage.data_dir == tmp_path
