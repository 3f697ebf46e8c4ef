"""Mini README: In-memory user directory behind the admin pages.

Structure:
    * AccountStatus - active, inactive or pending.
    * UserAccount - dataclass describing one managed user.
    * UserDirectory - search, create, update and delete helpers.

Accounts are demo data held for the lifetime of the process. Validation
failures raise ``FormValidationError`` so the admin view can show the same
notification the other forms use; unknown identifiers raise ``KeyError``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..errors import FormValidationError
from ..ledger.entries import ZERO, parse_date
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ROLES = ("user", "admin")


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"


@dataclass(slots=True)
class UserAccount:
    """A user as listed on the admin users page."""

    user_id: str
    name: str
    email: str
    role: str
    status: AccountStatus
    last_active: date
    transactions: int = 0
    total_amount: Decimal = ZERO

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "status": self.status.value,
            "last_active": self.last_active.isoformat(),
            "transactions": self.transactions,
            "total_amount": str(self.total_amount),
        }


def _demo_accounts() -> List[UserAccount]:
    rows = [
        ("1", "John Doe", "john@example.com", "user", "active", "2023-04-20", 32, "5420.75"),
        ("2", "Jane Smith", "jane@example.com", "user", "active", "2023-04-18", 48, "7320.50"),
        ("3", "Admin User", "admin@example.com", "admin", "active", "2023-04-21", 5, "0"),
        ("4", "Tom Wilson", "tom@example.com", "user", "pending", "2023-04-15", 0, "0"),
        ("5", "Sarah Johnson", "sarah@example.com", "user", "inactive", "2023-03-10", 12, "6150.25"),
    ]
    return [
        UserAccount(
            user_id,
            name,
            email,
            role,
            AccountStatus(status),
            date.fromisoformat(seen),
            count,
            Decimal(amount),
        )
        for user_id, name, email, role, status, seen, count, amount in rows
    ]


class UserDirectory:
    """Manage the accounts shown to administrators."""

    def __init__(self, accounts: Optional[Iterable[UserAccount]] = None) -> None:
        self._accounts: Dict[str, UserAccount] = {}
        for account in _demo_accounts() if accounts is None else accounts:
            self._accounts[account.user_id] = account
        LOGGER.debug("User directory initialised with %s accounts", len(self._accounts))

    def list_accounts(self) -> List[UserAccount]:
        return list(self._accounts.values())

    def get(self, user_id: str) -> UserAccount:
        if user_id not in self._accounts:
            raise KeyError(f"User {user_id} not found")
        return self._accounts[user_id]

    def search(
        self,
        term: str = "",
        role: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[UserAccount]:
        """Match name or email case-insensitively, and role/status exactly."""

        needle = (term or "").lower()
        return [
            account
            for account in self._accounts.values()
            if (needle in account.name.lower() or needle in account.email.lower())
            and (not role or account.role == role)
            and (not status or account.status.value == status)
        ]

    def _next_id(self) -> str:
        numeric = [int(key) for key in self._accounts if key.isdigit()]
        return str(max(numeric, default=0) + 1)

    def create(
        self, name: str, email: str, role: str = "user", today: Optional[date] = None
    ) -> UserAccount:
        """Add a pending account; name and email are required."""

        if not name or not name.strip() or not email or not email.strip():
            raise FormValidationError(message="Name and email are required.")
        if role not in ROLES:
            raise FormValidationError(message=f"Unknown role '{role}'.")
        account = UserAccount(
            user_id=self._next_id(),
            name=name.strip(),
            email=email.strip(),
            role=role,
            status=AccountStatus.PENDING,
            last_active=today or date.today(),
        )
        self._accounts[account.user_id] = account
        LOGGER.info("Created user %s (%s)", account.user_id, account.email)
        return account

    def update(self, user_id: str, **changes: object) -> UserAccount:
        """Apply edits from the admin edit dialog."""

        account = self.get(user_id)
        coerced: Dict[str, object] = {}
        for key, value in changes.items():
            if value is None:
                continue
            if key in {"name", "email"}:
                if not str(value).strip():
                    raise FormValidationError(message="Name and email are required.")
                coerced[key] = str(value).strip()
            elif key == "role":
                if value not in ROLES:
                    raise FormValidationError(message=f"Unknown role '{value}'.")
                coerced[key] = value
            elif key == "status":
                try:
                    coerced[key] = AccountStatus(value)
                except ValueError as error:
                    raise FormValidationError(message=f"Unknown status '{value}'.") from error
            elif key == "last_active":
                coerced[key] = parse_date(value)
            else:
                raise ValueError(f"Update of field '{key}' is not supported.")
        updated = replace(account, **coerced)
        self._accounts[user_id] = updated
        LOGGER.info("Updated user %s", user_id)
        return updated

    def delete(self, user_id: str) -> UserAccount:
        account = self.get(user_id)
        del self._accounts[user_id]
        LOGGER.info("Deleted user %s", user_id)
        return account
