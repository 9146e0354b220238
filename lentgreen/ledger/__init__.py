"""The ledger store and its first-run data."""

from lentgreen.ledger.demo import demo_snapshot
from lentgreen.ledger.store import LedgerStore

__all__ = ["LedgerStore", "demo_snapshot"]
