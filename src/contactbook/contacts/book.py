"""
Contact Book - a contact store paired with its file.

The book loads once at start-up and rewrites the whole file after every
successful mutation. A failed save keeps the in-memory change and reports
it back to the caller instead of raising, so the UI can show the error
while the user keeps working.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

from contactbook.contacts.errors import ContactLoadError, ContactSaveError
from contactbook.contacts.models import Contact
from contactbook.contacts.persistence import ContactFile
from contactbook.contacts.store import ContactStore


@dataclass
class ChangeResult:
    """Outcome of a contact book mutation."""

    contact: Contact
    index: int
    saved: bool = True
    error: Optional[ContactSaveError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contact_id": self.contact.contact_id,
            "index": self.index,
            "saved": self.saved,
            "error": str(self.error) if self.error else None,
        }


class ContactBook:
    """
    Contact book used by the presentation layer.

    Validation and index errors propagate before anything changes; storage
    errors on save are captured in the returned ``ChangeResult``.
    """

    def __init__(self, storage: ContactFile, store: Optional[ContactStore] = None) -> None:
        self.storage = storage
        self.store = store if store is not None else ContactStore()
        self.load_error: Optional[ContactLoadError] = None
        self._unsaved = False

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved

    def __len__(self) -> int:
        return len(self.store)

    def list(self) -> List[Contact]:
        return self.store.list()

    def load(self) -> List[Contact]:
        """
        Replace the in-memory list with the file contents.

        A missing file and an unreadable file both leave the book empty, but
        only the latter sets ``load_error``.
        """
        self.load_error = None
        if not self.storage.exists():
            logger.info(f"No contacts file at {self.storage.path}, starting with an empty list")
            self.store.replace_all([])
            self._unsaved = False
            return self.store.list()

        try:
            contacts = self.storage.load()
        except ContactLoadError as e:
            logger.warning(f"Discarding unreadable contacts file {self.storage.path}: {e}")
            self.load_error = e
            contacts = []

        self.store.replace_all(contacts)
        self._unsaved = False
        logger.info(f"Loaded {len(contacts)} contacts")
        return self.store.list()

    def save(self) -> Optional[ContactSaveError]:
        """Write the full list; return the error instead of raising it."""
        try:
            self.storage.save(self.store.list())
        except ContactSaveError as e:
            logger.error(f"Failed to save contacts: {e}")
            self._unsaved = True
            return e
        self._unsaved = False
        return None

    def add(self, name: str, phone: str, email: str = "") -> ChangeResult:
        index = self.store.add(name, phone, email)
        return self._persisted(self.store.get(index), index)

    def update(self, index: int, name: str, phone: str, email: str = "") -> ChangeResult:
        contact = self.store.update(index, name, phone, email)
        return self._persisted(contact, index)

    def delete(self, index: int) -> ChangeResult:
        contact = self.store.delete(index)
        return self._persisted(contact, index)

    def update_by_id(self, contact_id: str, name: str, phone: str, email: str = "") -> ChangeResult:
        return self.update(self.store.index_of(contact_id), name, phone, email)

    def delete_by_id(self, contact_id: str) -> ChangeResult:
        return self.delete(self.store.index_of(contact_id))

    def _persisted(self, contact: Contact, index: int) -> ChangeResult:
        error = self.save()
        return ChangeResult(contact=contact, index=index, saved=error is None, error=error)
