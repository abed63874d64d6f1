"""
Permission evaluator bound to the current user's role

PermissionEvaluator answers the questions the UI asks about the signed-in
user ("can I see the fees module?", "which modules do I have?"). It is given
the role explicitly, either as a value or as an accessor that is called on
every check, so a role change is picked up without rebuilding it.
"""
from typing import Any, Callable, Optional, Union

from flask import current_app, has_app_context, session

from school_erp.rbac.permissions import DEFAULT_POLICY
from school_erp.rbac.policy import PolicyTable, normalize_key
from school_erp.rbac.roles import Permission

RoleSource = Union[str, None, Callable[[], Optional[str]]]


class PermissionEvaluator:
    """Permission checks for one user, against one policy table."""

    def __init__(self, role: RoleSource = None, policy: Optional[PolicyTable] = None,
                 logged_in: Optional[Callable[[], bool]] = None):
        self._role = role
        self._logged_in = logged_in
        self.policy = DEFAULT_POLICY if policy is None else policy

    @property
    def current_role(self) -> Optional[str]:
        role = self._role() if callable(self._role) else self._role
        # Empty or non-string roles count as "no role"
        return normalize_key(role) or None

    @property
    def is_logged_in(self) -> bool:
        if self._logged_in is not None:
            return bool(self._logged_in())
        return self.current_role is not None

    # Permission checking functions

    def check_module_access(self, module: Any) -> bool:
        role = self.current_role
        if role is None:
            return False
        return self.policy.has_module(role, module)

    def check_permission(self, module: Any, permission: Any) -> bool:
        role = self.current_role
        if role is None:
            return False
        return self.policy.has_permission(role, module, permission)

    # Data retrieval functions

    def get_user_modules(self) -> list[str]:
        role = self.current_role
        if role is None:
            return []
        return list(self.policy.modules_for(role))

    def get_module_permissions(self, module: Any) -> list[str]:
        role = self.current_role
        if role is None:
            return []
        return list(self.policy.permissions_for(role, module))

    def get_user_role_description(self) -> str:
        role = self.current_role
        if role is None:
            return ''
        return self.policy.description(role)

    def get_permission_matrix(self) -> dict[str, list[str]]:
        """Permissions held in every module of the policy, for the matrix view"""
        role = self.current_role
        return {
            module: list(self.policy.permissions_for(role, module)) if role else []
            for module in self.policy.modules
        }

    # Convenience functions for common checks

    def can_view(self, module: Any) -> bool:
        return self.check_permission(module, Permission.VIEW)

    def can_create(self, module: Any) -> bool:
        return self.check_permission(module, Permission.CREATE)

    def can_edit(self, module: Any) -> bool:
        return self.check_permission(module, Permission.EDIT)

    def can_delete(self, module: Any) -> bool:
        return self.check_permission(module, Permission.DELETE)

    def can_manage(self, module: Any) -> bool:
        return self.check_permission(module, Permission.MANAGE)

    def can_approve(self, module: Any) -> bool:
        return self.check_permission(module, Permission.APPROVE)

    def can_assign(self, module: Any) -> bool:
        return self.check_permission(module, Permission.ASSIGN)

    def can_grade(self, module: Any) -> bool:
        return self.check_permission(module, Permission.GRADE)

    def __repr__(self):
        return f"<PermissionEvaluator role={self.current_role!r}>"


def get_policy() -> PolicyTable:
    """Policy table of the running app, or the built-in default outside one"""
    if has_app_context():
        return current_app.extensions.get('rbac', DEFAULT_POLICY)
    return DEFAULT_POLICY


def get_user_role() -> Optional[str]:
    """Role stored in the session by the login flow, None when signed out"""
    return normalize_key(session.get('role')) or None


def evaluator_from_session() -> PermissionEvaluator:
    """
    Build an evaluator for the user of the current request.

    The session is read on every check rather than once here, so the same
    evaluator stays correct across a logout or role switch.
    """
    return PermissionEvaluator(
        get_user_role,
        policy=get_policy(),
        logged_in=lambda: 'user_id' in session,
    )
