"""
Design (repository.py)
- Purpose: Encapsulate the registry state behind a tiny API so commands and the GUI
           never touch the users dict directly.
- Inputs: User objects and integer IDs.
- Outputs: Users, assigned IDs, and (id, User) lists.
- Side effects: Updates internal dictionary only; persistence is done by storage.py.
- Thread-safety: Not shared between threads; each command or poll builds its own Data.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .config import NEXT_ID_TAG, USERS_TAG
from .errors import DataFormatError
from .models import User

logger = logging.getLogger(__name__)


class Data:
    """
    Design (Data)
    - State:
        _users: {user_id -> User}
        _next_id: smallest non-negative int not used as a key in _users.
                  Recomputed after every add/remove/reset so freed IDs get reused.
    """

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._users)

    @property
    def next_id(self) -> int:
        return self._next_id

    def _calculate_next_id(self) -> None:
        next_id = 0
        while next_id in self._users:
            next_id += 1
        self._next_id = next_id

    # -------- CRUD for users --------

    def add_user(self, user: User) -> int:
        """
        Purpose: Store a user under the lowest free ID.
        Inputs: user (User)
        Outputs: the assigned ID
        Side effects: Mutates _users and _next_id.
        """
        user_id = self._next_id
        self._users[user_id] = user
        self._calculate_next_id()
        logger.debug("added user %d, next id is %d", user_id, self._next_id)
        return user_id

    def user(self, user_id: int) -> Optional[User]:
        """Return the user stored under user_id, or None."""
        return self._users.get(user_id)

    def remove_user(self, user_id: int) -> Optional[User]:
        """
        Purpose: Remove a user by ID.
        Inputs: user_id (int)
        Outputs: the removed User, or None if the ID was not present (state unchanged).
        Side effects: Mutates _users and _next_id.
        """
        user = self._users.pop(user_id, None)
        if user is None:
            return None
        self._calculate_next_id()
        logger.debug("removed user %d, next id is %d", user_id, self._next_id)
        return user

    def reset(self) -> bool:
        """
        Purpose: Remove every user.
        Outputs: True if there was something to remove, False if already empty.
        Side effects: Clears _users; _next_id goes back to 0.
        """
        if not self._users:
            return False
        self._users.clear()
        self._calculate_next_id()
        logger.debug("reset registry")
        return True

    def users(self) -> List[Tuple[int, User]]:
        """All (id, user) pairs. Order is not meaningful; sort by id before display."""
        return list(self._users.items())

    # -------- JSON document form --------

    def to_dict(self) -> Dict[str, Any]:
        return {
            NEXT_ID_TAG: self._next_id,
            USERS_TAG: {str(user_id): user.to_dict() for user_id, user in self._users.items()},
        }

    @classmethod
    def from_dict(cls, obj: Any) -> "Data":
        """
        Build Data from a parsed JSON document.
        Raises DataFormatError on any shape problem. The stored next id is validated
        but then recomputed from the keys, so a hand-edited file cannot break allocation.
        """
        if not isinstance(obj, dict):
            raise DataFormatError("registry document must be a JSON object")
        if NEXT_ID_TAG not in obj or USERS_TAG not in obj:
            raise DataFormatError(f"registry document needs '{NEXT_ID_TAG}' and '{USERS_TAG}' fields")

        next_id = obj[NEXT_ID_TAG]
        if isinstance(next_id, bool) or not isinstance(next_id, int) or next_id < 0:
            raise DataFormatError(f"'{NEXT_ID_TAG}' must be a non-negative integer")

        raw_users = obj[USERS_TAG]
        if not isinstance(raw_users, dict):
            raise DataFormatError(f"'{USERS_TAG}' must be a JSON object")

        data = cls()
        for key, item in raw_users.items():
            # canonical decimal only, so "01" and "1" cannot both map to ID 1
            try:
                user_id = int(key) if key.isascii() and key.isdigit() else None
            except ValueError:
                user_id = None
            if user_id is None or str(user_id) != key:
                raise DataFormatError(f"user ID '{key[:20]}' is not a non-negative integer")
            data._users[user_id] = User.from_dict(item)
        data._calculate_next_id()
        if data._next_id != next_id:
            logger.debug("stored next id %d does not match occupancy, using %d", next_id, data._next_id)
        return data
