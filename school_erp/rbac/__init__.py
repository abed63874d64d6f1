"""
RBAC (Role-Based Access Control) module for the school ERP

Access is described by a static policy table mapping each role to the
modules it may use and the actions it may perform in each of them, e.g.:
- Teacher: view and edit students, grade examinations
- Accountant: manage and approve fees
- Admin: every action on every module

Anything the table does not grant is denied.
"""

from school_erp.rbac.roles import Role, Module, Permission, role_label
from school_erp.rbac.policy import PolicyTable, PolicyError, load_policy
from school_erp.rbac.permissions import (
    DEFAULT_POLICY,
    has_module_access,
    has_permission,
    get_modules_for_role,
    get_permissions_for_module,
    get_role_description,
    get_permission_matrix
)
from school_erp.rbac.evaluator import PermissionEvaluator, evaluator_from_session
from school_erp.rbac.guard import (
    Allowed,
    Denied,
    AccessDeniedNotice,
    permission_guard,
    hide_if_no_permission,
    show_for_roles
)
from school_erp.rbac.decorators import (
    login_required,
    role_required,
    module_required,
    permission_required
)

__all__ = [
    'Role',
    'Module',
    'Permission',
    'role_label',
    'PolicyTable',
    'PolicyError',
    'load_policy',
    'DEFAULT_POLICY',
    'has_module_access',
    'has_permission',
    'get_modules_for_role',
    'get_permissions_for_module',
    'get_role_description',
    'get_permission_matrix',
    'PermissionEvaluator',
    'evaluator_from_session',
    'Allowed',
    'Denied',
    'AccessDeniedNotice',
    'permission_guard',
    'hide_if_no_permission',
    'show_for_roles',
    'login_required',
    'role_required',
    'module_required',
    'permission_required',
]
