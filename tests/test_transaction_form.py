"""Mini README: Tests for the "Add Transaction" form validation.

Structure:
    * test_valid_submission_builds_entry - accepted forms produce ledger entries.
    * test_invalid_submissions_raise_notification - each missing or malformed
      field maps to the same user-facing validation error.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from fintrack.errors import FormValidationError
from fintrack.ledger import EntryKind, LedgerEntry, TransactionForm, parse_amount


def test_valid_submission_builds_entry() -> None:
    """String amounts and kind casing are coerced before building the entry."""

    form = TransactionForm.submit(
        {
            "kind": "Income",
            "amount": "500.50",
            "category": "Freelance",
            "counterparty": " Client ",
            "entry_date": "2023-04-05",
        }
    )
    entry = form.to_entry("txn_0042")

    assert entry.kind is EntryKind.INCOME
    assert entry.amount == Decimal("500.50")
    assert entry.counterparty == "Client"
    assert entry.entry_date == date(2023, 4, 5)
    assert entry.description == ""


def test_entry_date_defaults_to_today() -> None:
    form = TransactionForm.submit({"amount": 12, "category": "Food", "counterparty": "Cafe"})

    assert form.kind is EntryKind.EXPENSE
    assert form.entry_date == date.today()


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "", "category": "Food", "counterparty": "Cafe"},
        {"amount": "twelve", "category": "Food", "counterparty": "Cafe"},
        {"amount": "-3", "category": "Food", "counterparty": "Cafe"},
        {"amount": "12", "category": "", "counterparty": "Cafe"},
        {"amount": "12", "category": "Food", "counterparty": "   "},
        {"amount": "12", "category": "Salary", "counterparty": "Cafe"},
        {"amount": "12", "counterparty": "Cafe"},
        {"kind": "transfer", "amount": "12", "category": "Food", "counterparty": "Cafe"},
        {"amount": float("nan"), "category": "Food", "counterparty": "Cafe"},
        {"amount": float("inf"), "category": "Food", "counterparty": "Cafe"},
        {"amount": Decimal("NaN"), "category": "Food", "counterparty": "Cafe"},
        {"amount": "Infinity", "category": "Food", "counterparty": "Cafe"},
    ],
)
def test_invalid_submissions_raise_notification(payload) -> None:
    with pytest.raises(FormValidationError) as excinfo:
        TransactionForm.submit(payload)

    assert excinfo.value.as_notification() == {
        "title": "Validation Error",
        "description": "Please fill in all required fields with valid values.",
        "variant": "destructive",
    }


@pytest.mark.parametrize(
    "amount", [float("nan"), float("-inf"), Decimal("NaN"), Decimal("Infinity"), "nan"]
)
def test_non_finite_amounts_are_rejected_as_value_errors(amount) -> None:
    with pytest.raises(ValueError):
        parse_amount(amount)
    with pytest.raises(ValueError):
        LedgerEntry("txn_0001", "expense", "2023-04-03", "Cafe", amount, "Food")
