"""UI module - contact manager window and form affordances."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contactbook.ui.affordances import FormAffordances, affordances_for

if TYPE_CHECKING:
    from contactbook.ui.window import ContactManagerWindow as ContactManagerWindow

__all__ = ["ContactManagerWindow", "FormAffordances", "affordances_for"]


def __getattr__(name: str):
    # Lazy import so the pure helpers work without a Qt installation.
    if name == "ContactManagerWindow":
        from contactbook.ui.window import ContactManagerWindow

        return ContactManagerWindow
    raise AttributeError(name)
