"""
Contact Book - desktop contact list manager

Main entry point for the Contact Book application.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from contactbook.app import cli  # noqa: E402

if __name__ == "__main__":
    cli()
