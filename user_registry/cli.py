"""
Design (cli.py)
- Purpose: Command-line front end: parse arguments, prepare the data file location,
           dispatch to one command, and own the single top-level error handler.
- Inputs: argv.
- Outputs: Text on stdout; error message on stderr and exit status 1 on failure.
- Side effects: Creates the data file's parent directory; configures logging.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .commands import add, get, remove, reset, show, write_user
from .config import LOG_FORMAT, PHONE_NUMBER_MAX
from .errors import RegistryError
from .models import User
from .storage import get_data_path

logger = logging.getLogger(__name__)


class CliError(Exception):
    """A failure that is already phrased for the user."""


def _user_id(value: str) -> int:
    try:
        user_id = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ID: '{value}'")
    if user_id < 0:
        raise argparse.ArgumentTypeError(f"invalid ID: '{value}' (must not be negative)")
    return user_id


def _phone_number(value: str) -> str:
    """Accept only an unsigned 64-bit integer, but keep the text as typed (leading zeros)."""
    if not (value.isascii() and value.isdigit()) or int(value) > PHONE_NUMBER_MAX:
        raise argparse.ArgumentTypeError(f"invalid phone number: '{value}'")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="user-registry",
        description="Register users in a file with their data via GUI or CLI.",
    )
    parser.add_argument(
        "-d", "--data",
        type=Path,
        metavar="FILE",
        help="File to load and save user data (defaults to data directory).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    p_add = sub.add_parser("add", help="Store a new user entry in the file.")
    p_add.add_argument("first_name", help="The user's first name.")
    p_add.add_argument("last_name", help="The user's surname (last name).")
    p_add.add_argument("email", help="The user's email address.")
    p_add.add_argument("phone_number", type=_phone_number, help="The user's telephone number.")

    p_get = sub.add_parser("get", help="Retrieve a user's data by their unique ID.")
    p_get.add_argument("id", type=_user_id, help="The ID of the user whose data is to be fetched.")

    p_remove = sub.add_parser("remove", help="Remove a user entry from the file.")
    p_remove.add_argument("id", type=_user_id, help="The ID of the user to remove.")

    sub.add_parser("reset", help="Permanently delete all user data.")
    sub.add_parser("show", help="Display all user data.")
    sub.add_parser("gui", help="Open the graphical interface.")
    return parser


def prepare_data_file(data: Optional[Path]) -> Path:
    """
    Resolve the data file path and make sure it can be used.
    Creates the parent directory; rejects a path that exists but is not a regular file.
    """
    data_file = data if data is not None else get_data_path()
    if data_file is None:
        raise CliError("Couldn't get data file path. Try using --data to specify one.")

    parent = data_file.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise CliError(f"Failed to create data directory: {err}") from err

    if data_file.exists() and not data_file.is_file():
        raise CliError("The data path must be a file. Specify another one.")
    return data_file


def _attempt(context: str, func, *args):
    # OSError here is a failure writing to stdout, e.g. a closed pipe
    try:
        return func(*args)
    except (RegistryError, OSError) as err:
        raise CliError(f"{context}: {err}") from err


def run(argv: Optional[List[str]] = None) -> int:
    """Run one command. Returns 0; raises CliError on failure."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    data_file = prepare_data_file(args.data)
    logger.debug("using data file %s", data_file)

    if args.command == "add":
        user = User(
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            phone_number=args.phone_number,
        )
        user_id = _attempt("User couldn't be added", add, data_file, user)
        print(f"User added with ID {user_id}.")
    elif args.command == "get":
        user = _attempt("Couldn't get user", get, data_file, args.id)
        _attempt("Couldn't write user", write_user, user, args.id, sys.stdout)
    elif args.command == "remove":
        _attempt("Couldn't remove user", remove, data_file, args.id)
        print(f"User {args.id} removed.")
    elif args.command == "reset":
        if _attempt("Couldn't reset the data file", reset, data_file):
            print("All user data deleted.")
        else:
            print("No user data to delete.")
    elif args.command == "show":
        _attempt("Couldn't write users", show, data_file, sys.stdout)
    elif args.command == "gui":
        # tkinter is only needed for this command
        try:
            from .ui import run as run_gui
        except ImportError as err:
            raise CliError(f"An error occurred in the GUI: {err}") from err

        _attempt("An error occurred in the GUI", run_gui, data_file)
    return 0


def main() -> None:
    try:
        sys.exit(run())
    except CliError as err:
        print(err, file=sys.stderr)
        sys.exit(1)
