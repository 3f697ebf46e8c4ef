"""Mini README: Validation for the "Add Transaction" form.

Structure:
    * TransactionForm - Pydantic model describing one submitted transaction.
    * TransactionForm.submit - validates a raw payload, raising
      ``FormValidationError`` with the notification text on failure.

Validation happens before anything touches a repository, so a rejected
submission leaves stored entries untouched and the caller can redisplay the
user's input alongside the error toast.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, validator

from ..errors import FormValidationError
from ..logging_utils import get_logger
from .entries import ZERO, EntryKind, LedgerEntry, parse_amount, parse_date

LOGGER = get_logger(__name__)


class TransactionForm(BaseModel):
    """Fields accepted when recording an income or expense."""

    kind: EntryKind = EntryKind.EXPENSE
    amount: Decimal
    category: str
    counterparty: str
    entry_date: date = Field(default_factory=date.today)
    description: str = ""

    @validator("kind", pre=True)
    def _coerce_kind(cls, value: Any) -> EntryKind:
        return EntryKind.from_str(str(value))

    @validator("amount", pre=True)
    def _coerce_amount(cls, value: Any) -> Decimal:
        amount = parse_amount(value)
        if amount < ZERO:
            raise ValueError("Amount must not be negative.")
        return amount

    @validator("entry_date", pre=True)
    def _coerce_date(cls, value: Any) -> date:
        return parse_date(value)

    @validator("counterparty", "category")
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Field is required.")
        return value.strip()

    @validator("category")
    def _category_in_catalogue(cls, value: str, values: dict) -> str:
        kind = values.get("kind")
        if kind is not None and value not in kind.categories:
            raise ValueError(f"Category '{value}' is not valid for {kind.value} entries.")
        return value

    @classmethod
    def submit(cls, payload: Mapping[str, Any]) -> "TransactionForm":
        """Validate a raw payload or raise the user-facing validation error."""

        try:
            return cls(**dict(payload))
        except ValidationError as error:
            LOGGER.info("Rejected transaction form: %s", error.errors())
            raise FormValidationError() from error

    def to_entry(self, entry_id: str) -> LedgerEntry:
        """Build the ledger entry this form describes."""

        return LedgerEntry(
            entry_id=entry_id,
            kind=self.kind,
            entry_date=self.entry_date,
            counterparty=self.counterparty,
            amount=self.amount,
            category=self.category,
            description=self.description,
        )
