"""
Contacts file.

Persists the whole contact list as a JSON array. Every save rewrites the
file through a temporary sibling and ``os.replace`` so an interrupted write
never leaves a half-written file in place.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from contactbook.contacts.errors import (
    ContactLoadError,
    ContactSaveError,
    ContactValidationError,
)
from contactbook.contacts.models import Contact, new_contact_id
from contactbook.contacts.store import validate_contact


class ContactRecord(BaseModel):
    """On-disk schema for a single contact."""

    id: str = Field(default_factory=new_contact_id)
    name: str
    phone: str
    email: str = ""

    @field_validator("id")
    @classmethod
    def _validate_id(cls, v: str) -> str:
        v = (v or "").strip()
        return v or new_contact_id()

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactRecord":
        return cls(id=contact.contact_id, name=contact.name, phone=contact.phone, email=contact.email)

    def to_contact(self) -> Contact:
        name, phone, email = validate_contact(self.name, self.phone, self.email)
        return Contact(name=name, phone=phone, email=email, contact_id=self.id)


_RECORDS = TypeAdapter(List[ContactRecord])


def _atomic_write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", delete=False, encoding="utf-8", dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(content)
        # Keep the permissions of the file being replaced.
        if path.exists():
            shutil.copymode(str(path), str(tmp_path))
        os.replace(str(tmp_path), str(path))
    except OSError:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise


class ContactFile:
    """Reads and writes the contact list at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Contact]:
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContactLoadError(self.path, f"Cannot read {self.path}: {e}") from e

        try:
            records = _RECORDS.validate_json(text)
        except ValidationError as e:
            raise ContactLoadError(self.path, f"{self.path} is not a valid contacts file: {e}") from e

        contacts: List[Contact] = []
        seen_ids = set()
        for i, record in enumerate(records):
            try:
                contact = record.to_contact()
            except ContactValidationError as e:
                raise ContactLoadError(self.path, f"{self.path}: record {i} is invalid: {e}") from e
            if contact.contact_id in seen_ids:
                raise ContactLoadError(self.path, f"{self.path}: duplicate contact id {contact.contact_id!r}")
            seen_ids.add(contact.contact_id)
            contacts.append(contact)

        logger.debug(f"Loaded {len(contacts)} contacts from {self.path}")
        return contacts

    def save(self, contacts: Iterable[Contact]) -> None:
        records = [ContactRecord.from_contact(c).model_dump() for c in contacts]
        content = json.dumps(records, indent=2, ensure_ascii=False)
        try:
            _atomic_write_text(self.path, content + "\n")
        except OSError as e:
            raise ContactSaveError(self.path, f"Error saving contacts: {e}") from e
        logger.debug(f"Saved {len(records)} contacts to {self.path}")
