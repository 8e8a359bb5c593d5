"""
Design (user_registry)
- Purpose: Personal contact registry. Users are kept in a JSON file and managed
           through the CLI (cli.py) or viewed in a small Tkinter window (ui.py).
- Public API: User, Data, the command functions, and the error classes.
"""

from .errors import DataFormatError, GuiError, RegistryError, StorageError, UserNotFoundError
from .models import User
from .repository import Data

__all__ = [
    "Data",
    "DataFormatError",
    "GuiError",
    "RegistryError",
    "StorageError",
    "User",
    "UserNotFoundError",
]
