"""Mini README: Tests for the ledger filter and aggregate pipeline.

Structure:
    * filter_entries - reset, date, category and combined filtering.
    * filter_by_kind - dashboard toggle between income and expenses.
    * category_breakdown / summarise_balances - chart and card figures.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.ledger import (
    EntryKind,
    LedgerEntry,
    category_breakdown,
    filter_by_kind,
    filter_entries,
    summarise_balances,
)


def _entries() -> list[LedgerEntry]:
    return [
        LedgerEntry("txn_0001", EntryKind.INCOME, date(2023, 4, 1), "Monthly Salary", "3500", "Salary"),
        LedgerEntry("txn_0002", EntryKind.INCOME, date(2023, 4, 5), "Freelance Project", "500", "Freelance"),
        LedgerEntry("txn_0003", EntryKind.INCOME, date(2023, 4, 5), "Client bonus", "120.25", "Salary"),
        LedgerEntry("txn_0004", EntryKind.INCOME, date(2023, 4, 20), "Online Store", "350", "Side Business"),
    ]


def test_no_filters_returns_everything_with_full_total() -> None:
    """Passing neither filter resets the view to all entries."""

    entries = _entries()
    result = filter_entries(entries)

    assert result.matched == entries
    assert result.total == Decimal("4470.25")


def test_date_filter_matches_by_day_only() -> None:
    """A datetime filter is compared at day granularity."""

    result = filter_entries(_entries(), date_filter=datetime(2023, 4, 5, 17, 45))

    assert [entry.entry_id for entry in result.matched] == ["txn_0002", "txn_0003"]
    assert all(entry.entry_date == date(2023, 4, 5) for entry in result.matched)
    assert result.total == Decimal("620.25")


def test_category_filter_is_exact_and_case_sensitive() -> None:
    """Only identical category labels match."""

    entries = _entries()

    assert [entry.entry_id for entry in filter_entries(entries, category_filter="Salary").matched] == [
        "txn_0001",
        "txn_0003",
    ]
    assert filter_entries(entries, category_filter="salary").matched == []


def test_empty_category_filter_means_no_filter() -> None:
    assert len(filter_entries(_entries(), category_filter="").matched) == 4


def test_combined_filters_and_idempotence() -> None:
    """Filtering twice with the same criteria yields the same result."""

    entries = _entries()
    first = filter_entries(entries, date_filter=date(2023, 4, 5), category_filter="Salary")
    second = filter_entries(first.matched, date_filter=date(2023, 4, 5), category_filter="Salary")

    assert [entry.entry_id for entry in first.matched] == ["txn_0003"]
    assert second.matched == first.matched
    assert second.total == first.total == sum((entry.amount for entry in first.matched), Decimal("0"))


@pytest.mark.parametrize(
    "entries, date_filter, category_filter",
    [
        ([], None, None),
        (_entries(), date(2022, 1, 1), None),
        (_entries(), None, "Gift"),
    ],
)
def test_no_match_yields_empty_result(entries, date_filter, category_filter) -> None:
    result = filter_entries(entries, date_filter=date_filter, category_filter=category_filter)

    assert result.matched == []
    assert result.total == Decimal("0")


def test_filter_does_not_mutate_input() -> None:
    entries = _entries()
    snapshot = list(entries)

    filter_entries(entries, category_filter="Salary")

    assert entries == snapshot


def test_negative_amount_is_rejected() -> None:
    with pytest.raises(ValueError):
        LedgerEntry("txn_0009", EntryKind.EXPENSE, date(2023, 4, 1), "Refund", "-5", "Food")


def test_filter_by_kind_supports_all_toggle() -> None:
    entries = _entries() + [
        LedgerEntry("txn_0005", "expense", "2023-04-03", "Grocery Store", 85.4, "Food"),
    ]

    assert len(filter_by_kind(entries, "all")) == 5
    assert len(filter_by_kind(entries, None)) == 5
    assert [entry.entry_id for entry in filter_by_kind(entries, "Expense")] == ["txn_0005"]
    with pytest.raises(ValueError):
        filter_by_kind(entries, "transfers")


def test_category_breakdown_sums_in_first_seen_order() -> None:
    slices = category_breakdown(_entries())

    assert [(item.label, item.value) for item in slices] == [
        ("Salary", Decimal("3620.25")),
        ("Freelance", Decimal("500")),
        ("Side Business", Decimal("350")),
    ]
    assert slices[0].color == "#22c55e"


def test_category_breakdown_with_explicit_kind_on_mixed_entries() -> None:
    """An explicit kind selects both the entries and the palette."""

    mixed = _entries() + [
        LedgerEntry("txn_0005", EntryKind.EXPENSE, date(2023, 4, 3), "Grocery Store", "85.40", "Food"),
    ]

    expenses = category_breakdown(mixed, kind="expense")
    income = category_breakdown(mixed, kind=EntryKind.INCOME)

    assert [(item.label, item.value, item.color) for item in expenses] == [
        ("Food", Decimal("85.40"), "#9b87f5")
    ]
    assert [item.label for item in income] == ["Salary", "Freelance", "Side Business"]
    assert income[0].color == "#22c55e"
    assert category_breakdown([], kind=EntryKind.INCOME) == []
    with pytest.raises(ValueError):
        category_breakdown(mixed)


def test_summarise_balances_handles_no_income() -> None:
    expenses_only = [LedgerEntry("txn_0001", "expense", "2023-04-05", "Rent", "1200", "Rent")]

    summary = summarise_balances(expenses_only)

    assert summary.balance == Decimal("-1200")
    assert summary.savings_rate == Decimal("0")


def test_summarise_balances_computes_savings_rate() -> None:
    entries = [
        LedgerEntry("txn_0001", "income", "2023-04-01", "Salary", "4000", "Salary"),
        LedgerEntry("txn_0002", "expense", "2023-04-05", "Rent", "1000", "Rent"),
    ]

    summary = summarise_balances(entries)

    assert summary.balance == Decimal("3000")
    assert summary.savings_rate == Decimal("0.75")
