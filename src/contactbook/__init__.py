"""
Contact Book - desktop contact list manager.

Keeps a list of contacts (name, phone, email) in a local JSON file and edits
it through a PyQt6 form-and-table window.
"""

__version__ = "0.1.0"
__author__ = "Contact Book Team"

__all__ = ["__version__"]
