"""
Policy table for the RBAC system

A policy table maps role -> module -> permissions, plus a description per
role. It is built once (from the built-in defaults or a JSON file) and is
read-only afterwards. Lookups never raise: anything missing means no access.
"""
import json
import logging
import os
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional

logger = logging.getLogger(__name__)


class PolicyError(ValueError):
    """Raised when a policy definition is malformed or cannot be loaded."""


def normalize_key(value: Any) -> Optional[str]:
    """
    Turn a role/module/permission argument into a lookup key.

    Enum members are reduced to their value; anything that is not a string
    (None included) yields None, which never matches a table entry.
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    return None


def _required_key(value: Any, what: str) -> str:
    key = normalize_key(value)
    if not key:
        raise PolicyError(f"{what} must be a non-empty string, got {value!r}")
    return key


def _freeze_permissions(role: str, module: str, permissions: Any) -> tuple[str, ...]:
    if isinstance(permissions, (str, bytes)) or not isinstance(permissions, Iterable):
        raise PolicyError(
            f"Permissions for role '{role}' module '{module}' must be a list of strings"
        )
    frozen = []
    for permission in permissions:
        key = _required_key(permission, f"Permission in role '{role}' module '{module}'")
        if key not in frozen:
            frozen.append(key)
    return tuple(frozen)


class PolicyTable:
    """Immutable role -> module -> permissions mapping."""

    def __init__(self, roles: Mapping, descriptions: Optional[Mapping] = None):
        if not isinstance(roles, Mapping):
            raise PolicyError("Policy roles must be a mapping of role -> modules")

        table = {}
        for role, modules in roles.items():
            role_key = _required_key(role, "Role")
            if not isinstance(modules, Mapping):
                raise PolicyError(f"Modules for role '{role_key}' must be a mapping")
            module_table = {}
            for module, permissions in modules.items():
                module_key = _required_key(module, f"Module of role '{role_key}'")
                module_table[module_key] = _freeze_permissions(role_key, module_key, permissions)
            table[role_key] = MappingProxyType(module_table)

        described = {}
        for role, description in (descriptions or {}).items():
            role_key = _required_key(role, "Described role")
            if role_key not in table:
                raise PolicyError(f"Description given for unknown role '{role_key}'")
            if not isinstance(description, str):
                raise PolicyError(f"Description of role '{role_key}' must be a string")
            described[role_key] = description

        self._roles = MappingProxyType(table)
        self._descriptions = MappingProxyType(described)

    @classmethod
    def from_dict(cls, data: Any) -> 'PolicyTable':
        """
        Build a table from the serialized policy format:

            {"roles": {"teacher": {"description": "...",
                                   "modules": {"students": ["view", "edit"]}}}}
        """
        if not isinstance(data, Mapping) or not isinstance(data.get('roles'), Mapping):
            raise PolicyError("Policy document must contain a 'roles' mapping")

        roles = {}
        descriptions = {}
        for role, entry in data['roles'].items():
            if not isinstance(entry, Mapping):
                raise PolicyError(f"Entry for role {role!r} must be a mapping")
            roles[role] = entry.get('modules', {})
            if 'description' in entry:
                descriptions[role] = entry['description']
        return cls(roles, descriptions)

    def to_dict(self) -> dict:
        """Serialize back to the format accepted by from_dict."""
        return {
            'roles': {
                role: {
                    'description': self.description(role),
                    'modules': {module: list(perms) for module, perms in modules.items()},
                }
                for role, modules in self._roles.items()
            }
        }

    @property
    def roles(self) -> list[str]:
        return list(self._roles)

    @property
    def modules(self) -> list[str]:
        """Every module mentioned by any role, in first-seen order."""
        seen = []
        for modules in self._roles.values():
            for module in modules:
                if module not in seen:
                    seen.append(module)
        return seen

    def modules_for(self, role: Any) -> tuple[str, ...]:
        modules = self._roles.get(normalize_key(role))
        if modules is None:
            return ()
        return tuple(modules)

    def permissions_for(self, role: Any, module: Any) -> tuple[str, ...]:
        modules = self._roles.get(normalize_key(role))
        if modules is None:
            return ()
        return modules.get(normalize_key(module), ())

    def has_module(self, role: Any, module: Any) -> bool:
        modules = self._roles.get(normalize_key(role))
        return modules is not None and normalize_key(module) in modules

    def has_permission(self, role: Any, module: Any, permission: Any) -> bool:
        if not self.has_module(role, module):
            return False
        key = normalize_key(permission)
        return key is not None and key in self.permissions_for(role, module)

    def description(self, role: Any) -> str:
        return self._descriptions.get(normalize_key(role), '')

    def __contains__(self, role: Any) -> bool:
        return normalize_key(role) in self._roles

    def __repr__(self):
        return f"<PolicyTable roles={self.roles!r}>"


def load_policy(path: str) -> PolicyTable:
    """
    Load a policy table from a JSON file.

    Raises:
        PolicyError: if the file is missing, is not valid JSON or does not
            describe a policy table.
    """
    if not os.path.isfile(path):
        raise PolicyError(f"Policy file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PolicyError(f"Could not read policy file {path}: {e}") from e

    policy = PolicyTable.from_dict(data)
    logger.info(f"Loaded RBAC policy from {path} with roles: {', '.join(policy.roles)}")
    return policy
