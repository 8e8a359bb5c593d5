"""Pytest configuration and fixtures."""

import pytest

from user_registry.models import User


@pytest.fixture
def john():
    return User("John", "Doe", "john@x.com", "5551234")


@pytest.fixture
def jane():
    return User("Jane", "Roe", "jane@x.com", "5555678")


@pytest.fixture
def jim():
    return User("Jim", "Poe", "jim@x.com", "5559999")


@pytest.fixture
def data_file(tmp_path):
    """Path to a data file that does not exist yet."""
    return tmp_path / "users.txt"
