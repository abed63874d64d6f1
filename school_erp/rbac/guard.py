"""
Permission guard

Decides whether a piece of content may be shown to the current user. The
decision is returned as Allowed(content) or Denied(fallback) and carries no
rendering logic, the view layer interprets it.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union
import logging

from school_erp.rbac.evaluator import PermissionEvaluator
from school_erp.rbac.policy import normalize_key

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "You don't have permission to access this content."


@dataclass(frozen=True)
class AccessDeniedNotice:
    """Generic notice shown in place of denied content when asked for."""
    message: str = ACCESS_DENIED_MESSAGE


@dataclass(frozen=True)
class Allowed:
    content: Any

    def __bool__(self):
        return True


@dataclass(frozen=True)
class Denied:
    fallback: Any = None

    def __bool__(self):
        return False


GuardDecision = Union[Allowed, Denied]


def check_access(evaluator: PermissionEvaluator,
                 module: Any = None,
                 permission: Any = None,
                 required_roles: Optional[Iterable[Any]] = None) -> bool:
    """
    Run the guard checks in order, the first failing one denies.

    1. required_roles: the current role must be one of them. A missing role
       fails this check.
    2. module: the role must have access to the module.
    3. module and permission: the role must hold the permission in the module.

    With no constraint at all, access is allowed. An empty module or
    permission ("" or None) is not a constraint.
    """
    role = evaluator.current_role

    if required_roles is not None:
        if isinstance(required_roles, str):
            required_roles = [required_roles]
        allowed_roles = {normalize_key(r) for r in required_roles}
        if role is None or role not in allowed_roles:
            logger.debug(f"Guard denied role {role!r}, requires one of {sorted(filter(None, allowed_roles))}")
            return False

    if module and not evaluator.check_module_access(module):
        logger.debug(f"Guard denied role {role!r} access to module {module}")
        return False

    if module and permission \
            and not evaluator.check_permission(module, permission):
        logger.debug(f"Guard denied role {role!r} permission {permission} on {module}")
        return False

    return True


def permission_guard(evaluator: PermissionEvaluator,
                     content: Any,
                     module: Any = None,
                     permission: Any = None,
                     required_roles: Optional[Iterable[Any]] = None,
                     fallback: Any = None,
                     show_alert: bool = False) -> GuardDecision:
    """
    Decide whether content may be rendered for the current user.

    Args:
        evaluator: Evaluator for the current user
        content: What to render when access is granted
        module: Module the user needs access to (optional)
        permission: Permission needed within module (optional, only checked
            together with module)
        required_roles: Roles allowed to see the content (optional)
        fallback: What to render instead when access is denied
        show_alert: Render an AccessDeniedNotice when denied and no
            fallback is given

    Returns:
        Allowed(content), or Denied(fallback | AccessDeniedNotice() | None)
    """
    if check_access(evaluator, module, permission, required_roles):
        return Allowed(content)

    if fallback is not None:
        return Denied(fallback)
    if show_alert:
        return Denied(AccessDeniedNotice())
    return Denied()


def hide_if_no_permission(evaluator: PermissionEvaluator, content: Any,
                          module: Any, permission: Any = None) -> GuardDecision:
    """Hide content unless the user has the module (and permission, if given)"""
    return permission_guard(evaluator, content, module=module, permission=permission)


def show_for_roles(evaluator: PermissionEvaluator, content: Any,
                   roles: Iterable[Any]) -> GuardDecision:
    """Show content only to the listed roles"""
    return permission_guard(evaluator, content, required_roles=roles)
