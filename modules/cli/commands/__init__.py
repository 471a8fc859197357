"""
CLI Commands.

Organized by domain/feature area.
"""

from modules.cli.commands.db import app as db_app
from modules.cli.commands.notes import app as notes_app
from modules.cli.commands.system import app as system_app

__all__ = [
    "db_app",
    "notes_app",
    "system_app",
]
