"""
RBAC decorators for route protection

Templates only hide what a user cannot use; these decorators repeat the same
checks on the server so a hidden action cannot be called directly.
"""
from functools import wraps
from flask import session, redirect, url_for, request, jsonify
import logging

from school_erp.rbac.evaluator import evaluator_from_session
from school_erp.rbac.guard import check_access

logger = logging.getLogger(__name__)


def _wants_json() -> bool:
    return request.is_json or request.headers.get('Content-Type') == 'application/json' \
        or request.path.startswith('/api/')


def _unauthorized():
    logger.info("Unauthorized access attempt - redirecting to dashboard")
    if _wants_json():
        return jsonify({'error': 'Login required'}), 401
    return redirect(url_for('dashboard.index'))


def _forbidden(message: str):
    if _wants_json():
        return jsonify({'error': message}), 403
    return redirect(url_for('dashboard.index'))


def login_required(f):
    """Decorator to require login for routes."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            return _unauthorized()
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    """
    Decorator to restrict a route to the given roles.

    Args:
        roles: Role enums or role strings

    Example:
        @role_required(Role.ADMIN, Role.ACCOUNTANT)
        def revenue():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if 'user_id' not in session:
                return _unauthorized()

            evaluator = evaluator_from_session()
            if not check_access(evaluator, required_roles=roles):
                logger.info(f"User {session['user_id']} with role {evaluator.current_role} "
                            f"attempted to access route restricted to {', '.join(map(str, roles))}")
                return _forbidden('Access restricted to: ' + ', '.join(map(str, roles)))

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def module_required(module):
    """Decorator to require access to a module for routes."""
    return permission_required(module, None)


def permission_required(module, permission):
    """
    Decorator to require a permission within a module for routes.

    Args:
        module: Module enum or module string
        permission: Permission enum or permission string, None to only
            require access to the module

    Example:
        @permission_required(Module.FEES, Permission.APPROVE)
        def approve_payment(invoice_id):
            ...

    Raises:
        ValueError: if module is empty, which would protect nothing
    """
    if not module:
        raise ValueError("permission_required needs a module")

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if 'user_id' not in session:
                return _unauthorized()

            evaluator = evaluator_from_session()
            if not check_access(evaluator, module=module, permission=permission):
                required = f"{module}:{permission}" if permission is not None else f"{module}"
                logger.info(f"User {session['user_id']} with role {evaluator.current_role} "
                            f"attempted to access route requiring {required}")
                return _forbidden('Insufficient permissions')

            return f(*args, **kwargs)
        return decorated_function
    return decorator
