from unittest.mock import Mock

import pytest

from users_api.proxy import API
from users_api.storage import Database
from users_api.users import create_app


@pytest.fixture
def funct():
    """Mock function for testing purposes."""
    return Mock(__name__="Mock")


@pytest.fixture
def database():
    return Database()


@pytest.fixture
def app(database):
    """Users API backed by an empty database."""
    api = create_app(database)
    yield api

    # Clear logger handlers
    for h in list(api.log.handlers):
        api.log.removeHandler(h)


@pytest.fixture
def bare_api():
    api = API(name="test")
    yield api

    for h in list(api.log.handlers):
        api.log.removeHandler(h)
