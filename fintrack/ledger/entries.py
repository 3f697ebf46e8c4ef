"""Mini README: Ledger entry model shared by the income and expense views.

Structure:
    * EntryKind - enum representing income versus expense entries.
    * INCOME_CATEGORIES / EXPENSE_CATEGORIES - fixed catalogues per kind.
    * LedgerEntry - dataclass storing one dated, categorised amount.
    * parse_date / parse_amount - coercion helpers reused by forms and storage.

Amounts are held as ``Decimal`` so totals shown on the dashboard add up to
the cent. Entries are validated on construction; once built they are treated
as trusted in-memory data by the filter pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ZERO = Decimal("0")

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investments",
    "Rental",
    "Side Business",
    "Gift",
    "Others",
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Rent",
    "Utilities",
    "Entertainment",
    "Transport",
    "Shopping",
    "Healthcare",
    "Education",
    "Travel",
    "Others",
)


class EntryKind(str, Enum):
    """Enumerate the supported entry kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: str) -> "EntryKind":
        """Coerce arbitrary casing into a valid entry kind."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported entry kind: {value}") from error

    @property
    def categories(self) -> Tuple[str, ...]:
        """Catalogue of categories an entry of this kind may use."""

        return INCOME_CATEGORIES if self is EntryKind.INCOME else EXPENSE_CATEGORIES


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects, dropping any time of day."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def parse_amount(value: object) -> Decimal:
    """Convert user or fixture input into a ``Decimal`` currency amount."""

    if isinstance(value, bool):
        raise ValueError("Amounts must be numeric.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # str() keeps 85.65 as 85.65 instead of its binary expansion
        amount = Decimal(str(value))
    elif isinstance(value, str) and value.strip():
        try:
            amount = Decimal(value.strip())
        except InvalidOperation as error:
            raise ValueError(f"Amount '{value}' is not numeric.") from error
    else:
        raise ValueError("Amounts must be numeric.")
    # NaN would otherwise blow up the later sign comparisons
    if not amount.is_finite():
        raise ValueError(f"Amount '{value}' is not a finite number.")
    return amount


@dataclass(slots=True)
class LedgerEntry:
    """Represent one income or expense record."""

    entry_id: str
    kind: EntryKind
    entry_date: date
    counterparty: str
    amount: Decimal
    category: str
    description: str = ""

    def __post_init__(self) -> None:
        self.kind = EntryKind.from_str(self.kind)
        self.entry_date = parse_date(self.entry_date)
        self.amount = parse_amount(self.amount)
        if self.amount < ZERO:
            raise ValueError(f"Entry {self.entry_id} has a negative amount: {self.amount}")

    def as_dict(self) -> Dict[str, object]:
        """Export the entry with serialisable values."""

        return {
            "id": self.entry_id,
            "kind": self.kind.value,
            "date": self.entry_date.isoformat(),
            "counterparty": self.counterparty,
            "amount": str(self.amount),
            "category": self.category,
            "description": self.description,
        }
