"""Mini README: Tests for the file-backed session store.

These tests confirm that login, logout and profile edits round through the
JSON file, that missing or corrupt data degrades to an anonymous guest, and
that password confirmation mismatches raise the expected notification.
"""

from __future__ import annotations

import json

import pytest

from fintrack.errors import FormValidationError
from fintrack.session import GUEST_PROFILE, SessionStore, UserProfile, change_password


def test_missing_file_loads_anonymous_guest(tmp_path) -> None:
    state = SessionStore(tmp_path / "session.json").load()

    assert state.authenticated is False
    assert state.user is None
    assert state.display_user == GUEST_PROFILE


def test_login_persists_flag_and_profile(tmp_path) -> None:
    path = tmp_path / "session.json"
    store = SessionStore(path)

    store.login(UserProfile(name="Jane Smith", email="jane@example.com"))

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["isAuthenticated"] == "true"
    assert json.loads(raw["user"])["email"] == "jane@example.com"
    reloaded = SessionStore(path).load()
    assert reloaded.authenticated is True
    assert reloaded.display_user.name == "Jane Smith"
    assert reloaded.is_admin is False


def test_logout_removes_both_keys(tmp_path) -> None:
    path = tmp_path / "session.json"
    store = SessionStore(path)
    store.login(UserProfile(name="Admin User", email="admin@example.com", role="admin"))

    store.logout()

    assert json.loads(path.read_text(encoding="utf-8")) == {}
    assert store.load().authenticated is False


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        json.dumps({"isAuthenticated": "true", "user": "{broken"}),
        json.dumps({"isAuthenticated": "true", "user": json.dumps({"name": 5})}),
    ],
)
def test_corrupt_data_falls_back_without_raising(tmp_path, content) -> None:
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")

    state = SessionStore(path).load()

    assert state.user is None
    assert state.display_user == GUEST_PROFILE


def test_update_profile_keeps_role(tmp_path) -> None:
    store = SessionStore(tmp_path / "session.json")
    store.login(UserProfile(name="Admin User", email="admin@example.com", role="admin"))

    updated = store.update_profile("Site Admin", "root@example.com")

    assert updated.display_user == UserProfile("Site Admin", "root@example.com", "admin")
    assert store.load().is_admin is True
    with pytest.raises(FormValidationError):
        store.update_profile("", "root@example.com")


def test_change_password_requires_matching_confirmation() -> None:
    with pytest.raises(FormValidationError) as excinfo:
        change_password("old-secret", "new-secret", "typo-secret")

    assert excinfo.value.title == "Password Mismatch"
    change_password("old-secret", "new-secret", "new-secret")
