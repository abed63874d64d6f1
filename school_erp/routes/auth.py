"""
Session routes

Signing in is handled by the school's identity provider, which stores
user_id, username and role in the session. These routes only inspect and
clear that session, plus a role switch for local demos.
"""
from collections.abc import Mapping
from flask import Blueprint, request, session, redirect, url_for, jsonify, current_app, abort
import logging

from school_erp.rbac.evaluator import get_policy, get_user_role

logger = logging.getLogger(__name__)
bp = Blueprint('auth', __name__)


@bp.route('/check_session')
def check_session():
    if 'user_id' in session:
        return {'logged_in': True, 'username': session.get('username'), 'role': get_user_role()}
    return {'logged_in': False}, 401


@bp.route('/logout', methods=['GET', 'POST'])
def logout():
    session.clear()
    # Handle AJAX requests differently
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return jsonify({
            'success': True,
            'redirect_url': url_for('dashboard.index')
        }), 200
    response = redirect(url_for('dashboard.index'))
    response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


@bp.route('/switch_role', methods=['POST'])
def switch_role():
    """Sign in as a demo user with the given role (DEMO_ROLE_SWITCH only)"""
    if not current_app.config.get('DEMO_ROLE_SWITCH'):
        abort(404)

    data = request.get_json(silent=True) if request.is_json else request.form
    if not isinstance(data, Mapping):
        return jsonify({'error': 'Expected an object with a role'}), 400

    role = data.get('role')
    role = role.strip() if isinstance(role, str) else ''
    if not role or role not in get_policy():
        return jsonify({'error': f"Unknown role '{role}'"}), 400

    session.clear()
    session['user_id'] = f'demo-{role}'
    session['username'] = data.get('username') or f'Demo {role}'
    session['role'] = role
    logger.info(f"Demo session switched to role {role}")

    if request.is_json:
        return jsonify({'success': True, 'role': role})
    return redirect(url_for('dashboard.index'))
