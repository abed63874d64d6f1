"""
Dashboard routes

The pages render for any visitor; what they show is decided per element by
the RBAC template helpers, so a signed-out visitor sees an empty dashboard.
"""
from flask import Blueprint, render_template, current_app

from school_erp.rbac.evaluator import get_policy
from school_erp.rbac.roles import Module, Permission, Role

bp = Blueprint('dashboard', __name__)


# Module cards, each shown only to roles with access to the module
DASHBOARD_CARDS = [
    {
        'title': 'Students',
        'description': 'Manage student records',
        'icon': 'users',
        'module': Module.STUDENTS.value,
        'create_action': 'Add Student',
        'manage_action': 'Manage Students'
    },
    {
        'title': 'Staff',
        'description': 'Staff management',
        'icon': 'user-check',
        'module': Module.STAFF.value,
        'create_action': 'Add Staff',
        'manage_action': 'Manage Staff'
    },
    {
        'title': 'Attendance',
        'description': 'Track attendance',
        'icon': 'calendar',
        'module': Module.ATTENDANCE.value,
        'create_action': 'Mark Attendance',
        'manage_action': 'View Reports'
    },
    {
        'title': 'Fees',
        'description': 'Fee management',
        'icon': 'dollar-sign',
        'module': Module.FEES.value,
        'create_action': 'Create Invoice',
        'manage_action': 'Manage Payments'
    },
    {
        'title': 'Library',
        'description': 'Book management',
        'icon': 'book-open',
        'module': Module.LIBRARY.value,
        'create_action': 'Add Book',
        'manage_action': 'Manage Library'
    },
    {
        'title': 'Transport',
        'description': 'Transport system',
        'icon': 'bus',
        'module': Module.TRANSPORT.value,
        'create_action': 'Add Route',
        'manage_action': 'Manage Transport'
    },
]

# Quick stats, each shown only to the listed roles
STAT_CARDS = [
    {
        'title': 'Total Students',
        'icon': 'users',
        'value': '1,234',
        'note': '+20 from last month',
        'roles': [Role.ADMIN.value, Role.TEACHER.value]
    },
    {
        'title': 'Monthly Revenue',
        'icon': 'dollar-sign',
        'value': '$45,231',
        'note': '+15% from last month',
        'roles': [Role.ADMIN.value, Role.ACCOUNTANT.value]
    },
    {
        'title': 'Attendance',
        'icon': 'calendar',
        'value': '92%',
        'note': 'This month',
        'roles': [Role.STUDENT.value, Role.PARENT.value]
    },
    {
        'title': 'Books Issued',
        'icon': 'book-open',
        'value': '342',
        'note': 'This week',
        'roles': [Role.ADMIN.value, Role.LIBRARIAN.value]
    },
]

CODE_EXAMPLES = [
    {
        'title': '1. Using the permission_guard macro',
        'code': '{% call permission_guard(module="students", permission="create") %}\n'
                '  <button>Add Student</button>\n'
                '{% endcall %}'
    },
    {
        'title': '2. Using the show_for_roles macro',
        'code': '{% call show_for_roles(["admin", "teacher"]) %}\n'
                '  {% include "admin_panel.html" %}\n'
                '{% endcall %}'
    },
    {
        'title': '3. Using PermissionEvaluator in Python',
        'code': 'evaluator = evaluator_from_session()\n\n'
                '# Check specific permission\n'
                'if evaluator.check_permission("students", "create"):\n'
                '    ...\n\n'
                '# Convenience method\n'
                'if evaluator.can_create("students"):\n'
                '    ...'
    },
    {
        'title': '4. Protecting a route',
        'code': '@bp.route("/fees/<int:invoice_id>/approve", methods=["POST"])\n'
                '@permission_required(Module.FEES, Permission.APPROVE)\n'
                'def approve_payment(invoice_id):\n'
                '    ...'
    },
]


@bp.route('/')
def index():
    """Role based dashboard"""
    return render_template(
        'dashboard.html',
        dashboard_cards=DASHBOARD_CARDS,
        stat_cards=STAT_CARDS,
        show_debug=current_app.config.get('SHOW_PERMISSION_DEBUG', False)
    )


@bp.route('/examples')
def examples():
    """Examples of role based rendering"""
    return render_template(
        'examples.html',
        modules=get_policy().modules,
        permissions=Permission.get_all(),
        code_examples=CODE_EXAMPLES
    )
