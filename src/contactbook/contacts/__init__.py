"""Contacts module - store, file persistence and the contact book."""

from contactbook.contacts.book import ChangeResult, ContactBook
from contactbook.contacts.errors import (
    ContactError,
    ContactIndexError,
    ContactLoadError,
    ContactNotFoundError,
    ContactSaveError,
    ContactStorageError,
    ContactValidationError,
    ValidationRule,
)
from contactbook.contacts.models import Contact
from contactbook.contacts.persistence import ContactFile
from contactbook.contacts.store import ContactStore, validate_contact

__all__ = [
    "ChangeResult",
    "Contact",
    "ContactBook",
    "ContactError",
    "ContactFile",
    "ContactIndexError",
    "ContactLoadError",
    "ContactNotFoundError",
    "ContactSaveError",
    "ContactStorageError",
    "ContactStore",
    "ContactValidationError",
    "ValidationRule",
    "validate_contact",
]
