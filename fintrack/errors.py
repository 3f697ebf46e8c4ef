"""Mini README: Exceptions surfaced to users as transient notifications.

``FormValidationError`` carries the title and message shown in the dashboard
toast. It is raised before any data is mutated so callers can keep the
submitted input and let the user correct it.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_VALIDATION_TITLE = "Validation Error"
DEFAULT_VALIDATION_MESSAGE = "Please fill in all required fields with valid values."


class FormValidationError(ValueError):
    """Raised when submitted form input cannot be accepted."""

    def __init__(
        self,
        title: str = DEFAULT_VALIDATION_TITLE,
        message: str = DEFAULT_VALIDATION_MESSAGE,
    ) -> None:
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message

    def as_notification(self) -> Dict[str, str]:
        """Return the payload rendered as a destructive toast."""

        return {"title": self.title, "description": self.message, "variant": "destructive"}
