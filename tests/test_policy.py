"""Tests for policy table construction and loading."""

import json

import pytest

from school_erp.rbac.policy import PolicyError, PolicyTable, load_policy
from school_erp.rbac.roles import Module, Permission, Role


def test_lookups(sample_policy):
    """Test the basic lookups of a policy table."""
    assert sample_policy.roles == ["teacher", "admin", "guest", "nobody"]
    assert sample_policy.modules == ["students", "attendance", "fees", "notices"]
    assert sample_policy.modules_for("teacher") == ("students", "attendance")
    assert sample_policy.permissions_for("teacher", "students") == ("view", "edit")
    assert sample_policy.description("teacher") == "Class teacher"
    assert sample_policy.description("guest") == ""
    assert "guest" in sample_policy
    assert "stranger" not in sample_policy


def test_missing_keys_are_empty(sample_policy):
    assert sample_policy.modules_for("stranger") == ()
    assert sample_policy.permissions_for("teacher", "fees") == ()
    assert sample_policy.permissions_for("stranger", "students") == ()
    assert sample_policy.description(None) == ""
    assert not sample_policy.has_module(None, "students")
    assert not sample_policy.has_permission("teacher", "students", None)


def test_enum_keys_are_normalized():
    """Enum keys and arguments behave like their string values."""
    policy = PolicyTable({Role.TEACHER: {Module.STUDENTS: [Permission.VIEW]}})
    assert policy.roles == ["teacher"]
    assert policy.has_permission("teacher", "students", "view")
    assert policy.has_permission(Role.TEACHER, Module.STUDENTS, Permission.VIEW)


def test_duplicate_permissions_collapse():
    policy = PolicyTable({"teacher": {"students": ["view", "edit", "view"]}})
    assert policy.permissions_for("teacher", "students") == ("view", "edit")


def test_table_is_immutable(sample_policy):
    """The table cannot be changed after construction."""
    source = {"teacher": {"students": ["view"]}}
    policy = PolicyTable(source)
    source["teacher"]["students"].append("delete")
    source["teacher"]["fees"] = ["view"]
    assert policy.permissions_for("teacher", "students") == ("view",)
    assert not policy.has_module("teacher", "fees")

    with pytest.raises(TypeError):
        policy._roles["admin"] = {}
    with pytest.raises(TypeError):
        policy._roles["teacher"]["fees"] = ("view",)


@pytest.mark.parametrize("roles", [
    ["teacher"],
    {"": {"students": ["view"]}},
    {"teacher": ["students"]},
    {"teacher": {"students": "view"}},
    {"teacher": {"students": ["view", 3]}},
    {"teacher": {None: ["view"]}},
])
def test_malformed_tables_raise(roles):
    with pytest.raises(PolicyError):
        PolicyTable(roles)


def test_description_for_unknown_role_raises():
    with pytest.raises(PolicyError):
        PolicyTable({"teacher": {}}, {"admin": "Administrator"})


def test_from_dict_round_trip(policy_document):
    policy = PolicyTable.from_dict(policy_document)
    assert policy.description("teacher") == "Class teacher"
    assert policy.description("clerk") == ""
    assert policy.to_dict()["roles"]["teacher"] == {
        "description": "Class teacher",
        "modules": {"students": ["view", "edit"]},
    }


@pytest.mark.parametrize("document", [
    [],
    {},
    {"roles": []},
    {"roles": {"teacher": ["students"]}},
])
def test_from_dict_rejects_bad_documents(document):
    with pytest.raises(PolicyError):
        PolicyTable.from_dict(document)


def test_load_policy(policy_file):
    """Test loading a policy from a JSON file."""
    policy = load_policy(policy_file)
    assert policy.roles == ["teacher", "clerk"]
    assert policy.has_permission("clerk", "fees", "view")


def test_load_policy_missing_file(tmp_path):
    with pytest.raises(PolicyError, match="not found"):
        load_policy(str(tmp_path / "missing.json"))


def test_load_policy_invalid_json(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PolicyError, match="Could not read"):
        load_policy(str(path))


def test_load_policy_wrong_shape(tmp_path):
    path = tmp_path / "policy.json"
    path.write_text(json.dumps({"roles": {"teacher": {"modules": {"students": "view"}}}}), encoding="utf-8")
    with pytest.raises(PolicyError):
        load_policy(str(path))


def test_load_policy_not_utf8(tmp_path):
    path = tmp_path / "policy.json"
    path.write_bytes(b'{"roles": {"\xff": {}}}')
    with pytest.raises(PolicyError, match="Could not read"):
        load_policy(str(path))
