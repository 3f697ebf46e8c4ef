"""Mini README: Filter and aggregate pipeline for ledger views.

Structure:
    * FilterResult - matched entries plus their total.
    * filter_entries - date/category filter used by the income and expense pages.
    * filter_by_kind - the dashboard's All/Income/Expenses toggle.
    * category_breakdown - per-category sums projected into chart slices.
    * BalanceSummary / summarise_balances - figures behind the dashboard cards.

Every function here is pure: inputs are never mutated and results depend only
on the arguments, so the views can call them freely on each render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..charts import EXPENSE_PALETTE, INCOME_PALETTE, ChartSlice, slices_from_pairs
from ..logging_utils import get_logger
from .entries import ZERO, EntryKind, LedgerEntry, parse_date

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class FilterResult:
    """Entries selected by a filter together with their summed amount."""

    matched: List[LedgerEntry] = field(default_factory=list)
    total: Decimal = ZERO

    def as_dict(self) -> Dict[str, object]:
        return {
            "entries": [entry.as_dict() for entry in self.matched],
            "total": str(self.total),
            "count": len(self.matched),
        }


def filter_entries(
    entries: Iterable[LedgerEntry],
    date_filter: Optional[date] = None,
    category_filter: Optional[str] = None,
) -> FilterResult:
    """Select entries on a given day and/or in a given category.

    A ``None`` date filter or an empty category filter matches everything, so
    passing neither resets the view. Dates compare at day granularity and
    categories compare exactly (case-sensitive). Encounter order is preserved.
    """

    target_day = parse_date(date_filter) if date_filter is not None else None
    matched: List[LedgerEntry] = []
    total = ZERO
    for entry in entries:
        if target_day is not None and entry.entry_date != target_day:
            continue
        if category_filter and entry.category != category_filter:
            continue
        matched.append(entry)
        total += entry.amount
    LOGGER.debug(
        "Filter date=%s category=%r matched %s entries totalling %s",
        target_day,
        category_filter,
        len(matched),
        total,
    )
    return FilterResult(matched=matched, total=total)


def filter_by_kind(
    entries: Iterable[LedgerEntry], kind: Optional[Union[EntryKind, str]] = None
) -> List[LedgerEntry]:
    """Return entries of one kind, or all of them for ``None``/``"all"``."""

    if kind is None or (isinstance(kind, str) and kind.strip().lower() == "all"):
        return list(entries)
    wanted = EntryKind.from_str(kind)
    return [entry for entry in entries if entry.kind is wanted]


def category_breakdown(
    entries: Iterable[LedgerEntry],
    kind: Optional[Union[EntryKind, str]] = None,
    palette: Optional[Sequence[str]] = None,
) -> List[ChartSlice]:
    """Sum amounts per category in first-seen order for the category charts.

    With ``kind`` given, only entries of that kind are summed and its palette
    is used. Without it the entries must share a single kind, which then
    picks the palette; mixing income and expenses raises ``ValueError``
    because their categories would be charted together.
    """

    entries = list(entries)
    if kind is None:
        kinds = {entry.kind for entry in entries}
        if len(kinds) > 1:
            raise ValueError("Mixed income and expense entries need an explicit kind.")
        wanted = next(iter(kinds), None)
    else:
        wanted = kind if isinstance(kind, EntryKind) else EntryKind.from_str(kind)
        entries = [entry for entry in entries if entry.kind is wanted]
    sums: Dict[str, Decimal] = {}
    for entry in entries:
        sums[entry.category] = sums.get(entry.category, ZERO) + entry.amount
    if palette is None:
        palette = INCOME_PALETTE if wanted is EntryKind.INCOME else EXPENSE_PALETTE
    return slices_from_pairs(sums.items(), palette)


@dataclass(slots=True)
class BalanceSummary:
    """Aggregates rendered on the dashboard balance cards."""

    total_income: Decimal
    total_expenses: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def savings_rate(self) -> Decimal:
        """Share of income kept, zero when nothing was earned."""

        if self.total_income == ZERO:
            return ZERO
        return self.balance / self.total_income

    def as_dict(self) -> Dict[str, str]:
        return {
            "total_income": str(self.total_income),
            "total_expenses": str(self.total_expenses),
            "balance": str(self.balance),
            "savings_rate": str(self.savings_rate),
        }


def summarise_balances(entries: Iterable[LedgerEntry]) -> BalanceSummary:
    """Split totals by kind for the dashboard cards."""

    income = ZERO
    expenses = ZERO
    for entry in entries:
        if entry.kind is EntryKind.INCOME:
            income += entry.amount
        else:
            expenses += entry.amount
    return BalanceSummary(total_income=income, total_expenses=expenses)
