"""
Permissions API

Exposes the current user's role and permissions to frontend code. These
endpoints only describe what the user may do; the routes that perform the
actions enforce it with the RBAC decorators.
"""
from flask import Blueprint, request, jsonify

from school_erp.rbac.decorators import login_required, role_required
from school_erp.rbac.evaluator import evaluator_from_session, get_policy
from school_erp.rbac.roles import Role

bp = Blueprint('permissions_api', __name__)


@bp.route('', methods=['GET'])
def current_permissions():
    """Role, modules and per-module permissions of the current user"""
    evaluator = evaluator_from_session()
    return jsonify({
        'role': evaluator.current_role,
        'logged_in': evaluator.is_logged_in,
        'description': evaluator.get_user_role_description(),
        'modules': evaluator.get_user_modules(),
        'permissions': {
            module: evaluator.get_module_permissions(module)
            for module in evaluator.get_user_modules()
        }
    })


@bp.route('/check', methods=['GET'])
@login_required
def check():
    """Check one module/permission pair for the current user"""
    module = request.args.get('module', '').strip()
    permission = request.args.get('permission', '').strip() or None
    if not module:
        return jsonify({'error': 'module is required'}), 400

    evaluator = evaluator_from_session()
    if permission is None:
        allowed = evaluator.check_module_access(module)
    else:
        allowed = evaluator.check_permission(module, permission)

    return jsonify({'module': module, 'permission': permission, 'allowed': allowed})


@bp.route('/policy', methods=['GET'])
@role_required(Role.ADMIN)
def policy():
    """The whole policy table (admin only)"""
    return jsonify(get_policy().to_dict())
