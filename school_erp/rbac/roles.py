"""
Role, module and permission vocabularies for the RBAC system

Roles, modules and permissions are plain strings everywhere the policy is
consulted. These enums only name the values the built-in policy uses.
"""
from enum import Enum


class Role(str, Enum):
    """User roles in the school ERP"""
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"
    ACCOUNTANT = "accountant"
    LIBRARIAN = "librarian"
    TRANSPORT_MANAGER = "transport_manager"

    def __str__(self):
        return self.value


class Module(str, Enum):
    """Functional areas of the application subject to access control"""
    STUDENTS = "students"
    STAFF = "staff"
    ATTENDANCE = "attendance"
    FEES = "fees"
    LIBRARY = "library"
    TRANSPORT = "transport"
    ACADEMICS = "academics"
    EXAMINATIONS = "examinations"
    TIMETABLE = "timetable"
    COMMUNICATION = "communication"
    NOTIFICATIONS = "notifications"
    REPORTS = "reports"
    INVENTORY = "inventory"
    SETTINGS = "settings"

    def __str__(self):
        return self.value


class Permission(str, Enum):
    """Actions that can be granted within a module"""
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE = "manage"
    APPROVE = "approve"
    ASSIGN = "assign"
    GRADE = "grade"

    def __str__(self):
        return self.value

    @classmethod
    def get_all(cls) -> list[str]:
        return [permission.value for permission in cls]


def role_label(role) -> str:
    """
    Display name for a role string: underscores become spaces and every
    word is capitalized. Returns an empty string for a missing role.
    """
    if isinstance(role, Enum):
        role = role.value
    if not isinstance(role, str) or not role:
        return ''
    return role.replace('_', ' ').title()
