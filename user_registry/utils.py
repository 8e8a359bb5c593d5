"""
Design (utils.py)
- Purpose: Reusable helpers: user text formatting, ID sorting, and the desktop notification wrapper.
- Inputs: Users, IDs, notification text.
- Outputs: Strings / sorted lists.
- Side effects: notify_change shows an OS notification (plyer).
- Thread-safety: Stateless; safe to call from any thread.
"""

import logging
from typing import Iterable, List, Tuple

from plyer import notification

from .config import NOTIFICATION_TIMEOUT_SEC, NOTIFICATION_TITLE
from .models import User

logger = logging.getLogger(__name__)


def format_user(user: User, user_id: int) -> str:
    """
    Purpose: Render one user as the multi-line block used by `get` and `show`.
    Outputs: Text ending with a newline.
    """
    return (
        f"User {user_id}:\n"
        f"    First name: {user.first_name}\n"
        f"    Last name: {user.last_name}\n"
        f"    Email: {user.email}\n"
        f"    Phone number: {user.phone_number}\n"
    )


def sorted_by_id(entries: Iterable[Tuple[int, User]]) -> List[Tuple[int, User]]:
    return sorted(entries, key=lambda entry: entry[0])


def describe_change(added: List[int], removed: List[int]) -> str:
    """
    Purpose: One-line summary of which IDs appeared / disappeared since the last poll.
    Outputs: e.g. "Added: 3, 4. Removed: 0." ('' if nothing changed).
    """
    parts = []
    if added:
        parts.append("Added: " + ", ".join(str(i) for i in added) + ".")
    if removed:
        parts.append("Removed: " + ", ".join(str(i) for i in removed) + ".")
    return " ".join(parts)


def notify_change(message: str) -> None:
    """
    Purpose: Show a desktop notification.
    Side Effects: Calls plyer; failures (no backend on this OS) are logged, not raised.
    """
    try:
        notification.notify(
            title=NOTIFICATION_TITLE,
            message=message,
            timeout=NOTIFICATION_TIMEOUT_SEC,
        )
    except Exception as err:
        logger.warning("desktop notification failed: %s", err)
