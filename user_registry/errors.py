"""
Design (errors.py)
- Purpose: Typed failures raised by the storage layer and the command functions.
- Outputs: Exception classes; the CLI top-level handler turns them into a message and exit status.
- Side effects: None.
"""


class RegistryError(Exception):
    """Base class for every failure a command can report."""


class UserNotFoundError(RegistryError):
    """The requested ID is not present in the data file."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"The user with the ID {user_id} was not found.")
        self.user_id = user_id


class StorageError(RegistryError):
    """Reading or writing the data file failed (wraps the OSError as __cause__)."""


class DataFormatError(RegistryError):
    """The data file is not empty but does not hold a valid registry document."""


class GuiError(RegistryError):
    """The window could not be created (e.g. no display available)."""
