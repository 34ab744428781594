"""Transient user notifications.

Services report the outcome of user actions as notifications rather than
raising into the view.
"""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A short message for the user."""

    message: str
    severity: Severity = Severity.SUCCESS

    @property
    def ok(self) -> bool:
        return self.severity == Severity.SUCCESS

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(message=message, severity=Severity.SUCCESS)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(message=message, severity=Severity.ERROR)
