"""Tests for role, module and permission vocabularies."""

from school_erp.rbac.roles import Module, Permission, Role, role_label


def test_enums_compare_equal_to_strings():
    assert Role.ADMIN == "admin"
    assert str(Module.FEES) == "fees"
    assert f"{Permission.APPROVE}" == "approve"
    assert "grade" in Permission.get_all()


def test_role_label():
    assert role_label("transport_manager") == "Transport Manager"
    assert role_label(Role.ADMIN) == "Admin"
    assert role_label(None) == ""
    assert role_label("") == ""
