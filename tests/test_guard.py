"""Tests for the permission guard."""

import pytest

from school_erp.rbac.evaluator import PermissionEvaluator
from school_erp.rbac.guard import (
    ACCESS_DENIED_MESSAGE,
    AccessDeniedNotice,
    Allowed,
    Denied,
    check_access,
    hide_if_no_permission,
    permission_guard,
    show_for_roles,
)
from school_erp.rbac.roles import Role


@pytest.fixture
def teacher(sample_policy):
    return PermissionEvaluator("teacher", policy=sample_policy)


@pytest.fixture
def anonymous(sample_policy):
    return PermissionEvaluator(None, policy=sample_policy)


def test_no_constraints_allows(teacher, anonymous):
    assert permission_guard(teacher, "content") == Allowed("content")
    assert permission_guard(anonymous, "content") == Allowed("content")


def test_teacher_scenario(teacher):
    """students/delete is denied to the fallback, students/view is allowed."""
    assert permission_guard(teacher, "children", module="students", permission="delete",
                            fallback="nope") == Denied("nope")
    assert permission_guard(teacher, "children", module="students",
                            permission="view") == Allowed("children")


def test_module_check(teacher):
    assert permission_guard(teacher, "x", module="attendance") == Allowed("x")
    assert permission_guard(teacher, "x", module="fees") == Denied()


def test_permission_without_module_is_ignored(teacher):
    assert permission_guard(teacher, "x", permission="delete") == Allowed("x")


def test_role_list(teacher):
    assert permission_guard(teacher, "x", required_roles=["admin", "teacher"]) == Allowed("x")
    assert permission_guard(teacher, "x", required_roles=[Role.TEACHER]) == Allowed("x")
    assert permission_guard(teacher, "x", required_roles="teacher") == Allowed("x")


@pytest.mark.parametrize("show_alert, fallback, expected", [
    (False, None, Denied()),
    (True, None, Denied(AccessDeniedNotice())),
    (True, "fallback", Denied("fallback")),
    (False, "fallback", Denied("fallback")),
])
def test_excluded_role_never_renders_children(teacher, show_alert, fallback, expected):
    decision = permission_guard(teacher, "children", required_roles=["admin"],
                                fallback=fallback, show_alert=show_alert)
    assert decision == expected
    assert not decision


def test_role_list_checked_before_module(teacher):
    decision = permission_guard(teacher, "x", module="students", required_roles=["admin"],
                                fallback="fb")
    assert decision == Denied("fb")


def test_missing_role_fails_closed(anonymous):
    """No session never passes a guard that has any constraint."""
    assert permission_guard(anonymous, "x", required_roles=["admin"]) == Denied()
    assert permission_guard(anonymous, "x", module="students") == Denied()
    assert permission_guard(anonymous, "x", module="students", permission="view") == Denied()


def test_decision_truthiness():
    assert Allowed(None)
    assert not Denied("fallback")


def test_notice_message():
    assert AccessDeniedNotice().message == ACCESS_DENIED_MESSAGE


def test_check_access(teacher):
    assert check_access(teacher)
    assert check_access(teacher, module="students", permission="edit")
    assert not check_access(teacher, module="students", permission="delete")
    assert not check_access(teacher, required_roles=[])


def test_wrappers(teacher):
    assert hide_if_no_permission(teacher, "x", "students") == Allowed("x")
    assert hide_if_no_permission(teacher, "x", "students", "delete") == Denied()
    assert show_for_roles(teacher, "x", ["teacher"]) == Allowed("x")
    assert show_for_roles(teacher, "x", ["student", "parent"]) == Denied()


def test_guard_reevaluates_on_role_change(sample_policy):
    state = {"role": "admin"}
    evaluator = PermissionEvaluator(lambda: state["role"], policy=sample_policy)
    assert permission_guard(evaluator, "x", module="fees") == Allowed("x")
    state["role"] = "teacher"
    assert permission_guard(evaluator, "x", module="fees") == Denied()


def test_empty_module_and_permission_are_not_constraints(teacher, anonymous):
    assert permission_guard(teacher, "x", module="") == Allowed("x")
    assert permission_guard(anonymous, "x", module="", permission="") == Allowed("x")
    assert permission_guard(teacher, "x", module="students", permission="") == Allowed("x")
    assert permission_guard(teacher, "x", module="fees", permission="") == Denied()
