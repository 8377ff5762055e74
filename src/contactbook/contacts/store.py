from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, Iterator, List, Tuple

from loguru import logger

from contactbook.contacts.errors import (
    ContactIndexError,
    ContactNotFoundError,
    ContactValidationError,
    ValidationRule,
)
from contactbook.contacts.models import Contact

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def validate_contact(name: str, phone: str, email: str = "") -> Tuple[str, str, str]:
    """
    Validate contact fields and return them trimmed.

    Rules are checked in order (name, phone, email) and the first one that
    fails is raised as a ``ContactValidationError``. Email may be empty;
    otherwise it must look like ``local@domain.tld``.
    """
    n = str(name or "").strip()
    if not n:
        raise ContactValidationError(ValidationRule.EMPTY_NAME)
    p = str(phone or "").strip()
    if not p:
        raise ContactValidationError(ValidationRule.EMPTY_PHONE)
    e = str(email or "").strip()
    if e and not EMAIL_PATTERN.fullmatch(e):
        raise ContactValidationError(ValidationRule.INVALID_EMAIL)
    return n, p, e


class ContactStore:
    """
    In-memory, insertion-ordered contact list.

    Positions are the index into the list and shift down after a delete.
    Every contact also carries a stable ``contact_id``; callers that hold on
    to a reference across mutations should use the ``*_by_id`` methods.
    """

    def __init__(self, contacts: Iterable[Contact] = ()) -> None:
        self._contacts: List[Contact] = list(contacts)

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self) -> Iterator[Contact]:
        return iter(self.list())

    def list(self) -> List[Contact]:
        return list(self._contacts)

    def get(self, index: int) -> Contact:
        self._check_index(index)
        return self._contacts[index]

    def index_of(self, contact_id: str) -> int:
        for i, c in enumerate(self._contacts):
            if c.contact_id == contact_id:
                return i
        raise ContactNotFoundError(contact_id)

    def add(self, name: str, phone: str, email: str = "") -> int:
        n, p, e = validate_contact(name, phone, email)
        self._contacts.append(Contact(name=n, phone=p, email=e))
        index = len(self._contacts) - 1
        logger.debug(f"Added contact {n!r} at position {index}")
        return index

    def update(self, index: int, name: str, phone: str, email: str = "") -> Contact:
        self._check_index(index)
        n, p, e = validate_contact(name, phone, email)
        updated = replace(self._contacts[index], name=n, phone=p, email=e)
        self._contacts[index] = updated
        logger.debug(f"Updated contact at position {index}")
        return updated

    def delete(self, index: int) -> Contact:
        self._check_index(index)
        removed = self._contacts.pop(index)
        logger.debug(f"Deleted contact {removed.name!r} from position {index}")
        return removed

    def update_by_id(self, contact_id: str, name: str, phone: str, email: str = "") -> Contact:
        return self.update(self.index_of(contact_id), name, phone, email)

    def delete_by_id(self, contact_id: str) -> Contact:
        return self.delete(self.index_of(contact_id))

    def replace_all(self, contacts: Iterable[Contact]) -> None:
        self._contacts = list(contacts)

    def _check_index(self, index: int) -> None:
        # Negative indices are rejected rather than counted from the end.
        if not isinstance(index, int) or index < 0 or index >= len(self._contacts):
            raise ContactIndexError(index, len(self._contacts))
