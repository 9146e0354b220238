"""Validation package."""

from lentgreen.validation.validator import LedgerValidator

__all__ = ["LedgerValidator"]
