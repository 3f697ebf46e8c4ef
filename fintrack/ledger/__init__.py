"""Mini README: Income and expense ledger core.

This package holds the entry model, the filter/aggregate pipeline shared by
the income, expense and dashboard views, and the validation behind the "Add
Transaction" form. Nothing here performs I/O; entries arrive from a
repository and results go straight to the presentation layer.
"""

from .entries import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    EntryKind,
    LedgerEntry,
    parse_amount,
    parse_date,
)
from .filtering import (
    BalanceSummary,
    FilterResult,
    category_breakdown,
    filter_by_kind,
    filter_entries,
    summarise_balances,
)
from .forms import TransactionForm

__all__ = [
    "BalanceSummary",
    "EXPENSE_CATEGORIES",
    "EntryKind",
    "FilterResult",
    "INCOME_CATEGORIES",
    "LedgerEntry",
    "TransactionForm",
    "category_breakdown",
    "filter_by_kind",
    "filter_entries",
    "parse_amount",
    "parse_date",
    "summarise_balances",
]
