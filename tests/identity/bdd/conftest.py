"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.user.registration import register_user
from pytest_bdd import given, parsers


@pytest.fixture()
def error():
    """Container for the error raised by the last When step."""
    return {"exc": None}


@pytest.fixture()
def account():
    return {"user": None}


@given(parsers.cfparse('"{email}" registered as a {role} named "{name}" with password "{password}"'))
def _(account, email, role, name, password):
    account["user"] = register_user(email, password, role, name)
