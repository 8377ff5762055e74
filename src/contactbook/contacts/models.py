from __future__ import annotations

import uuid
from dataclasses import dataclass, field


def new_contact_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Contact:
    name: str
    phone: str
    email: str = ""
    contact_id: str = field(default_factory=new_contact_id)

    def as_row(self) -> tuple:
        """Values in table column order (name, phone, email)."""
        return (self.name, self.phone, self.email)
