"""Pytest configuration and shared fixtures."""

import json

import pytest

from school_erp import create_app
from school_erp.config import TestingConfig
from school_erp.rbac.policy import PolicyTable


@pytest.fixture
def sample_policy():
    """Small policy table used by the scenario tests."""
    return PolicyTable(
        {
            "teacher": {"students": ["view", "edit"], "attendance": ["view", "create"]},
            "admin": {"students": ["view", "create", "edit", "delete"], "fees": ["view", "approve"]},
            "guest": {"notices": []},
            "nobody": {},
        },
        {"teacher": "Class teacher", "admin": "School administrator"},
    )


@pytest.fixture
def policy_document():
    """Serialized policy in the JSON file format."""
    return {
        "roles": {
            "teacher": {
                "description": "Class teacher",
                "modules": {"students": ["view", "edit"]},
            },
            "clerk": {
                "modules": {"fees": ["view"]},
            },
        }
    }


@pytest.fixture
def policy_file(tmp_path, policy_document):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps(policy_document), encoding="utf-8")
    return str(path)


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a signed-in user with the given role into the test client's session."""
    def _login(role, user_id=1, username="test_user"):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["username"] = username
            if role is not None:
                sess["role"] = role
        return client
    return _login
