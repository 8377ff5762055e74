"""Which form actions are available for the current table selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FormAffordances:
    add: bool
    update: bool
    delete: bool
    clear: bool = True


def affordances_for(selected_id: Optional[str]) -> FormAffordances:
    """Add is offered only with nothing selected; update/delete only with a selection."""
    selected = bool(selected_id)
    return FormAffordances(add=not selected, update=selected, delete=selected)
