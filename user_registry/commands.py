"""
Design (commands.py)
- Purpose: Caller-facing operations. Each one loads the data file, performs exactly one
           operation on Data, and saves it back when the operation changed something.
- Inputs: Data file path plus the operation's arguments.
- Outputs: Assigned IDs, Users, booleans, or text written to a writer.
- Side effects: At most one read and one write of the data file per call.
- Errors: UserNotFoundError, StorageError, DataFormatError (see errors.py).
"""

from pathlib import Path
from typing import TextIO

from .errors import UserNotFoundError
from .models import User
from .repository import Data
from .storage import read_data, save_data
from .utils import format_user, sorted_by_id


def add(path: Path, user: User) -> int:
    """Store a new user and return the ID it was given."""
    data = read_data(path)
    user_id = data.add_user(user)
    save_data(path, data)
    return user_id


def get(path: Path, user_id: int) -> User:
    user = read_data(path).user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


def remove(path: Path, user_id: int) -> User:
    """Remove a user and return it. The file is left untouched if the ID is unknown."""
    data = read_data(path)
    user = data.remove_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    save_data(path, data)
    return user


def reset(path: Path) -> bool:
    """Delete every user. Returns False (and writes nothing) if there were none."""
    data = read_data(path)
    if not data.reset():
        return False
    save_data(path, data)
    return True


def write_user(user: User, user_id: int, writer: TextIO) -> None:
    writer.write(format_user(user, user_id))


def show_data(data: Data, writer: TextIO) -> None:
    """Write every user ordered by ID, separated by a blank line."""
    first = True
    for user_id, user in sorted_by_id(data.users()):
        if first:
            first = False
        else:
            writer.write("\n")
        write_user(user, user_id, writer)


def show(path: Path, writer: TextIO) -> None:
    show_data(read_data(path), writer)
