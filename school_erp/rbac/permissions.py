"""
Permission definitions for RBAC system

Each role is granted a set of modules, and within each module a set of
actions. The functions here are pure lookups against a PolicyTable (the
built-in DEFAULT_POLICY unless one is passed in). Unknown roles, modules or
permissions are never an error; they simply have no access.
"""
from typing import Any, Optional

from school_erp.rbac.policy import PolicyTable
from school_erp.rbac.roles import Module, Permission, Role


def _all_permissions() -> list[Permission]:
    return list(Permission)


V, C, E, D = Permission.VIEW, Permission.CREATE, Permission.EDIT, Permission.DELETE


# Define module permissions for each role
ROLE_MODULE_PERMISSIONS: dict[Role, dict[Module, list[Permission]]] = {
    # Admin gets every action on every module
    Role.ADMIN: {module: _all_permissions() for module in Module},

    Role.TEACHER: {
        Module.STUDENTS: [V, E],
        Module.ATTENDANCE: [V, C, E],
        Module.ACADEMICS: [V, C, E, Permission.ASSIGN, Permission.GRADE],
        Module.EXAMINATIONS: [V, C, E, Permission.GRADE],
        Module.TIMETABLE: [V],
        Module.LIBRARY: [V],
        Module.COMMUNICATION: [V, C],
        Module.NOTIFICATIONS: [V],
        Module.REPORTS: [V],
    },

    Role.STUDENT: {
        Module.ATTENDANCE: [V],
        Module.ACADEMICS: [V],
        Module.EXAMINATIONS: [V],
        Module.TIMETABLE: [V],
        Module.LIBRARY: [V],
        Module.FEES: [V],
        Module.TRANSPORT: [V],
        Module.COMMUNICATION: [V],
        Module.NOTIFICATIONS: [V],
    },

    Role.PARENT: {
        Module.STUDENTS: [V],
        Module.ATTENDANCE: [V],
        Module.FEES: [V],
        Module.EXAMINATIONS: [V],
        Module.TIMETABLE: [V],
        Module.TRANSPORT: [V],
        Module.COMMUNICATION: [V, C],
        Module.NOTIFICATIONS: [V],
    },

    Role.ACCOUNTANT: {
        Module.FEES: [V, C, E, D, Permission.MANAGE, Permission.APPROVE],
        Module.STUDENTS: [V],
        Module.STAFF: [V],
        Module.REPORTS: [V, C],
        Module.INVENTORY: [V],
        Module.NOTIFICATIONS: [V],
    },

    Role.LIBRARIAN: {
        Module.LIBRARY: [V, C, E, D, Permission.MANAGE, Permission.ASSIGN],
        Module.STUDENTS: [V],
        Module.INVENTORY: [V],
        Module.NOTIFICATIONS: [V],
    },

    Role.TRANSPORT_MANAGER: {
        Module.TRANSPORT: [V, C, E, D, Permission.MANAGE, Permission.ASSIGN],
        Module.STUDENTS: [V],
        Module.STAFF: [V],
        Module.NOTIFICATIONS: [V],
    },
}

ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.ADMIN: "Full access to every module and system setting",
    Role.TEACHER: "Manage classes, attendance, assignments and grading",
    Role.STUDENT: "View timetable, attendance, results and school notices",
    Role.PARENT: "Follow your child's attendance, fees and results",
    Role.ACCOUNTANT: "Manage fee collection, invoices and financial reports",
    Role.LIBRARIAN: "Manage the book catalogue and book issues",
    Role.TRANSPORT_MANAGER: "Manage bus routes, vehicles and student transport",
}

DEFAULT_POLICY = PolicyTable(ROLE_MODULE_PERMISSIONS, ROLE_DESCRIPTIONS)


def _policy(policy: Optional[PolicyTable]) -> PolicyTable:
    return DEFAULT_POLICY if policy is None else policy


def has_module_access(role: Any, module: Any, policy: Optional[PolicyTable] = None) -> bool:
    """
    Check if a role has access to a module.

    Access is granted when the module is listed for the role, even if no
    action within it is granted.
    """
    return _policy(policy).has_module(role, module)


def has_permission(role: Any, module: Any, permission: Any,
                   policy: Optional[PolicyTable] = None) -> bool:
    """
    Check if a role may perform an action within a module.

    Args:
        role: Role enum or role string
        module: Module enum or module string
        permission: Permission enum or permission string
        policy: Table to consult, defaults to DEFAULT_POLICY

    Returns:
        True if the role has the module and the module grants the permission
    """
    return _policy(policy).has_permission(role, module, permission)


def get_modules_for_role(role: Any, policy: Optional[PolicyTable] = None) -> list[str]:
    """Get all modules of a role, empty for unknown roles"""
    return list(_policy(policy).modules_for(role))


def get_permissions_for_module(role: Any, module: Any,
                               policy: Optional[PolicyTable] = None) -> list[str]:
    """Get the permissions a role holds within a module"""
    return list(_policy(policy).permissions_for(role, module))


def get_role_description(role: Any, policy: Optional[PolicyTable] = None) -> str:
    """Get the human readable description of a role, '' when unknown"""
    return _policy(policy).description(role)


def get_permission_matrix(role: Any, policy: Optional[PolicyTable] = None) -> dict[str, list[str]]:
    """
    Get the permissions of a role for every module known to the policy.
    This is used to render the permissions matrix.

    Returns:
        Dictionary mapping module name to the list of permissions the role
        holds there (empty when the role has no access to the module)
    """
    table = _policy(policy)
    return {module: list(table.permissions_for(role, module)) for module in table.modules}
