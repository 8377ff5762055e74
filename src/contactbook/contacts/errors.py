"""
Contact errors.

Every failure the contact book reports derives from ``ContactError`` so the
UI can catch the whole family at one boundary.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional


class ValidationRule(str, Enum):
    """Which validation rule a contact failed."""
    EMPTY_NAME = "empty_name"
    EMPTY_PHONE = "empty_phone"
    INVALID_EMAIL = "invalid_email"


_RULE_MESSAGES = {
    ValidationRule.EMPTY_NAME: "Name cannot be empty.",
    ValidationRule.EMPTY_PHONE: "Phone cannot be empty.",
    ValidationRule.INVALID_EMAIL: "Please enter a valid email address or leave it empty.",
}


class ContactError(Exception):
    """Base class for contact book errors."""


class ContactValidationError(ContactError, ValueError):
    def __init__(self, rule: ValidationRule, message: Optional[str] = None):
        self.rule = rule
        super().__init__(message or _RULE_MESSAGES[rule])


class ContactIndexError(ContactError, IndexError):
    """Raised for a position that does not exist (usually a stale selection)."""

    def __init__(self, index: int, size: int, message: Optional[str] = None):
        self.index = index
        self.size = size
        super().__init__(message or f"No contact at position {index} (have {size})")


class ContactNotFoundError(ContactIndexError):
    def __init__(self, contact_id: str):
        self.contact_id = contact_id
        super().__init__(-1, 0, f"No contact with id {contact_id!r}")


class ContactStorageError(ContactError):
    """Base class for failures reading or writing the contacts file."""

    def __init__(self, path: Path, message: str):
        self.path = Path(path)
        super().__init__(message)


class ContactLoadError(ContactStorageError):
    pass


class ContactSaveError(ContactStorageError):
    pass
