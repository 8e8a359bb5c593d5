"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (User).
- Inputs: Field values (str).
- Outputs: Dataclass instances and their tagged dict form.
- Side effects: None.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .config import EMAIL_TAG, FIRST_NAME_TAG, LAST_NAME_TAG, PHONE_NUMBER_TAG
from .errors import DataFormatError

_FIELD_TAGS = (
    ("first_name", FIRST_NAME_TAG),
    ("last_name", LAST_NAME_TAG),
    ("email", EMAIL_TAG),
    ("phone_number", PHONE_NUMBER_TAG),
)


@dataclass(frozen=True)
class User:
    """
    Design (User)
    - Purpose: One person's contact information. Identity is assigned by Data, not stored here.
    - Fields:
        first_name: given name.
        last_name: surname.
        email: email address (not validated).
        phone_number: kept as text so leading zeros and symbols survive.
    """
    first_name: str
    last_name: str
    email: str
    phone_number: str

    def to_dict(self) -> Dict[str, str]:
        return {tag: getattr(self, field) for field, tag in _FIELD_TAGS}

    @classmethod
    def from_dict(cls, item: Any) -> "User":
        """
        Build a User from its tagged dict form.
        Raises DataFormatError if item is not a dict or a tag is missing / not a string.
        """
        if not isinstance(item, dict):
            raise DataFormatError(f"user entry must be an object, got {type(item).__name__}")
        values = {}
        for field, tag in _FIELD_TAGS:
            if tag not in item:
                raise DataFormatError(f"user entry is missing field '{tag}'")
            value = item[tag]
            if not isinstance(value, str):
                raise DataFormatError(f"user field '{tag}' must be a string")
            values[field] = value
        return cls(**values)
