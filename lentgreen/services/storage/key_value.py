"""
Key-Value Storage Implementations

DESIGN DECISION: The ledger is stored as three independently keyed
records (debts, people, templates). Each record is a JSON array holding
every field of every entity, in insertion order.

TRADEOFFS:
- The whole ledger is rewritten on every mutation (fine for personal use)
- No transactions across the three keys (a crash between writes can
  leave one record a step behind the others)

Decoding goes through the Pydantic models, so missing fields fall back
to the model defaults and unknown fields are ignored.
"""

import os
import tempfile
from abc import abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from lentgreen.config import StorageSettings
from lentgreen.models.ledger import Debt, DebtTemplate, LedgerSnapshot, Person
from lentgreen.services.storage.interface import (
    LedgerStorageInterface,
    StorageReadError,
    StorageWriteError,
)


_DEBTS = TypeAdapter(list[Debt])
_PEOPLE = TypeAdapter(list[Person])
_TEMPLATES = TypeAdapter(list[DebtTemplate])


class KeyValueLedgerStorage(LedgerStorageInterface):
    """
    Ledger storage on top of a string key-value store.

    Subclasses only implement raw reads and writes of one key.
    """

    def __init__(self, settings: Optional[StorageSettings] = None):
        self._settings = settings or StorageSettings()

    @property
    def keys(self) -> tuple[str, str, str]:
        return (
            self._settings.debts_key,
            self._settings.people_key,
            self._settings.templates_key,
        )

    @abstractmethod
    def _read(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written."""
        pass

    @abstractmethod
    def _write(self, key: str, value: str) -> None:
        pass

    def _decode(self, key: str, adapter: TypeAdapter) -> list:
        try:
            raw = self._read(key)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {key}: {e}")

        if raw is None or not raw.strip():
            return []

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            raise StorageReadError(f"Corrupt record {key}: {e}")

    def load(self) -> LedgerSnapshot:
        debts_key, people_key, templates_key = self.keys
        return LedgerSnapshot(
            debts=self._decode(debts_key, _DEBTS),
            people=self._decode(people_key, _PEOPLE),
            templates=self._decode(templates_key, _TEMPLATES),
        )

    def save(self, snapshot: LedgerSnapshot) -> None:
        debts_key, people_key, templates_key = self.keys
        records = [
            (debts_key, _DEBTS.dump_json(snapshot.debts)),
            (people_key, _PEOPLE.dump_json(snapshot.people)),
            (templates_key, _TEMPLATES.dump_json(snapshot.templates)),
        ]
        for key, payload in records:
            try:
                self._write(key, payload.decode("utf-8"))
            except OSError as e:
                raise StorageWriteError(f"Failed to write {key}: {e}")


class InMemoryLedgerStorage(KeyValueLedgerStorage):
    """
    Dictionary-backed storage.

    Values are kept as encoded JSON, so a save/load cycle exercises the
    same serialization path as the on-disk storage.
    """

    def __init__(self, settings: Optional[StorageSettings] = None):
        super().__init__(settings)
        self.values: dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def _write(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileLedgerStorage(KeyValueLedgerStorage):
    """
    One JSON file per key inside the configured data directory.

    Files are replaced atomically so a crash mid-write never leaves a
    half-written record behind.
    """

    def __init__(
        self,
        settings: Optional[StorageSettings] = None,
        data_dir: Optional[Path] = None,
    ):
        super().__init__(settings)
        self._data_dir = Path(data_dir or self._settings.data_dir).expanduser()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, key: str, value: str) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self.path_for(key))
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
