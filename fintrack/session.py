"""Mini README: Authentication state and the file-backed session store.

Structure:
    * UserProfile - display name, email and role of the signed-in user.
    * AuthState - explicit login flag plus profile handed to the views.
    * SessionStore - JSON key-value file holding ``isAuthenticated`` and
      ``user``, read once at startup and written on login, logout and profile
      edits.
    * change_password - confirmation check behind the settings form.

The store mirrors a browser's local storage: it is readable by anyone with
access to the file and carries no security guarantees. Missing or corrupt
data degrades to an anonymous guest instead of raising.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import FormValidationError
from .logging_utils import get_logger

LOGGER = get_logger(__name__)

AUTH_KEY = "isAuthenticated"
USER_KEY = "user"


@dataclass(slots=True, frozen=True)
class UserProfile:
    """Profile details shown in the sidebar and settings page."""

    name: str
    email: str
    role: str = "user"

    @classmethod
    def from_dict(cls, payload: Any) -> "UserProfile":
        """Build a profile from stored JSON, rejecting malformed records."""

        if not isinstance(payload, dict):
            raise ValueError("User record must be a JSON object.")
        name = payload.get("name")
        email = payload.get("email")
        if not isinstance(name, str) or not isinstance(email, str):
            raise ValueError("User record requires string name and email fields.")
        role = payload.get("role", "user")
        return cls(name=name, email=email, role=role if isinstance(role, str) else "user")

    def as_dict(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "role": self.role}


GUEST_PROFILE = UserProfile(name="User", email="user@example.com", role="user")


@dataclass(slots=True, frozen=True)
class AuthState:
    """Login flag and profile injected into the presentation layer."""

    authenticated: bool = False
    user: Optional[UserProfile] = None

    @property
    def display_user(self) -> UserProfile:
        """Profile to render, falling back to the guest record."""

        return self.user or GUEST_PROFILE

    @property
    def is_admin(self) -> bool:
        return self.authenticated and self.display_user.role == "admin"


ANONYMOUS = AuthState()


class SessionStore:
    """Persist ``AuthState`` in a small JSON key-value file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as error:
            LOGGER.warning("Unable to read session file %s: %s", self.path, error)
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as error:
            LOGGER.warning("Session file %s is corrupt: %s", self.path, error)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Session file %s does not hold a JSON object", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load(self) -> AuthState:
        """Return the stored state, or an anonymous one when unusable."""

        data = self._read()
        authenticated = data.get(AUTH_KEY) == "true"
        user: Optional[UserProfile] = None
        raw_user = data.get(USER_KEY)
        if raw_user is not None:
            try:
                # Stored as a JSON string, the way browser storage keeps it.
                user = UserProfile.from_dict(json.loads(raw_user) if isinstance(raw_user, str) else raw_user)
            except ValueError as error:
                LOGGER.warning("Ignoring malformed user record: %s", error)
        return AuthState(authenticated=authenticated, user=user)

    def save(self, state: AuthState) -> None:
        data = self._read()
        data[AUTH_KEY] = "true" if state.authenticated else "false"
        if state.user is None:
            data.pop(USER_KEY, None)
        else:
            data[USER_KEY] = json.dumps(state.user.as_dict())
        self._write(data)

    def login(self, profile: UserProfile) -> AuthState:
        state = AuthState(authenticated=True, user=profile)
        self.save(state)
        LOGGER.info("User %s logged in", profile.email)
        return state

    def logout(self) -> AuthState:
        data = self._read()
        data.pop(AUTH_KEY, None)
        data.pop(USER_KEY, None)
        self._write(data)
        LOGGER.info("Session cleared")
        return ANONYMOUS

    def update_profile(self, name: str, email: str) -> AuthState:
        """Change the display name and email while keeping the role."""

        if not name.strip() or not email.strip():
            raise FormValidationError(message="Name and email are required.")
        current = self.load()
        profile = replace(current.display_user, name=name.strip(), email=email.strip())
        state = AuthState(authenticated=current.authenticated, user=profile)
        self.save(state)
        LOGGER.info("Profile updated for %s", profile.email)
        return state


def change_password(current_password: str, new_password: str, confirm_password: str) -> None:
    """Validate a password change request.

    There is no credential store, so only the confirmation is checked.
    """

    if new_password != confirm_password:
        raise FormValidationError(
            title="Password Mismatch",
            message="New password and confirmation do not match.",
        )
    if not current_password or not new_password:
        raise FormValidationError()
    LOGGER.info("Password change accepted")
