"""
Template helper functions for RBAC
These functions are registered as Jinja2 globals to conditionally show/hide UI elements
"""
from typing import Any

from flask import g, render_template
from markupsafe import Markup, escape

from school_erp.rbac.evaluator import PermissionEvaluator, evaluator_from_session
from school_erp.rbac.guard import AccessDeniedNotice, Allowed, GuardDecision, permission_guard
from school_erp.rbac.roles import role_label


def current_evaluator() -> PermissionEvaluator:
    """Evaluator for the current request, built once per request"""
    if 'rbac_evaluator' not in g:
        g.rbac_evaluator = evaluator_from_session()
    return g.rbac_evaluator


def get_current_user_role():
    """Get current user's role for templates"""
    return current_evaluator().current_role


def user_is_logged_in() -> bool:
    return current_evaluator().is_logged_in


def can(module: Any, permission: Any) -> bool:
    """Check if user holds a permission within a module"""
    return current_evaluator().check_permission(module, permission)


def has_module(module: Any) -> bool:
    """Check if user has access to a module"""
    return current_evaluator().check_module_access(module)


def user_modules() -> list[str]:
    return current_evaluator().get_user_modules()


def role_description() -> str:
    return current_evaluator().get_user_role_description()


def permission_matrix() -> dict[str, list[str]]:
    return current_evaluator().get_permission_matrix()


def guard(content: Any = None, module: Any = None, permission: Any = None,
          roles: Any = None, fallback: Any = None, show_alert: bool = False) -> GuardDecision:
    """Template entry point of permission_guard for the current user"""
    return permission_guard(current_evaluator(), content, module=module, permission=permission,
                            required_roles=roles, fallback=fallback, show_alert=show_alert)


def render_decision(decision: GuardDecision) -> Markup:
    """
    Turn a guard decision into HTML.

    Allowed renders its content, Denied renders its fallback, the
    access-denied alert for an AccessDeniedNotice, or nothing.
    """
    if isinstance(decision, Allowed):
        return _to_markup(decision.content)

    fallback = decision.fallback
    if fallback is None:
        return Markup('')
    if isinstance(fallback, AccessDeniedNotice):
        return Markup(render_template('rbac/access_denied.html', message=fallback.message))
    return _to_markup(fallback)


def _to_markup(value: Any) -> Markup:
    if value is None:
        return Markup('')
    # Markup passes through untouched, plain strings are escaped
    return escape(value)


# Dictionary of all template helpers for easy registration
TEMPLATE_HELPERS = {
    'current_role': get_current_user_role,
    'is_logged_in': user_is_logged_in,
    'can': can,
    'has_module': has_module,
    'user_modules': user_modules,
    'role_description': role_description,
    'permission_matrix': permission_matrix,
    'guard': guard,
    'render_decision': render_decision,
    'role_label': role_label,
}
