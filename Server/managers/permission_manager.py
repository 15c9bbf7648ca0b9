"""
RoleDesk Server - Role Permission Manager

Answers which permissions exist and whether a role holds one of them.
Explicit RolePermission overrides win over the configured defaults.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple


def CategorizePermissions(
    permissions: Iterable[str],
    categories: List[Tuple[str, str]],
    other_label: str = "Other"
) -> "OrderedDict[str, List[str]]":
    """
    Group permission names into display categories

    A permission goes to the first category (in declared order) whose
    search key occurs anywhere in its name. Categories are then sorted by
    label, with the unmatched bucket always last.

    Args:
        permissions: Permission names
        categories: Ordered (label, search key) pairs
        other_label: Label of the bucket for unmatched permissions

    Returns:
        OrderedDict: label -> permission names (every declared label is present)
    """
    grouped: Dict[str, List[str]] = {label: [] for label, _ in categories}
    other: List[str] = []

    for permission in permissions:
        for label, search in categories:
            if search in permission:
                grouped[label].append(permission)
                break
        else:
            other.append(permission)

    result = OrderedDict((label, grouped[label]) for label in sorted(grouped))
    result[other_label] = other
    return result


class RolePermissionManager:
    """
    Permission catalog plus per-role grants
    """

    def __init__(
        self,
        permissions: List[str],
        default_role_permissions: Dict[str, List[str]],
        overrides: Optional[Dict[str, Dict[str, bool]]] = None,
        super_admin_role: str = "ROLE_SUPER_ADMIN",
        manage_permission: str = "role_permissions"
    ):
        """
        Args:
            permissions: Registered permission names
            default_role_permissions: role -> permissions granted without overrides
            overrides: role -> {permission: allowed} from the database
            super_admin_role: Role that always keeps manage_permission
            manage_permission: Permission required to manage role permissions
        """
        self.permissions = list(permissions)
        self._registered = set(self.permissions)
        self.defaults = {role.upper(): set(perms) for role, perms in default_role_permissions.items()}
        self.overrides = {role.upper(): dict(perms) for role, perms in (overrides or {}).items()}
        self.super_admin_role = super_admin_role.upper()
        self.manage_permission = manage_permission

    @classmethod
    def FromConfig(cls, config_manager, overrides=None) -> "RolePermissionManager":
        return cls(
            permissions=config_manager.GetPermissions(),
            default_role_permissions=config_manager.GetDefaultRolePermissions(),
            overrides=overrides,
            super_admin_role=config_manager.get("super_admin_role"),
            manage_permission=config_manager.get("manage_permission")
        )

    def GetPermissions(self) -> List[str]:
        return list(self.permissions)

    def IsRegisteredPermission(self, permission: str) -> bool:
        return permission in self._registered

    def IsLocked(self, role_name: str, permission: str) -> bool:
        """The super admin can never lose the right to manage permissions"""
        return role_name.upper() == self.super_admin_role and permission == self.manage_permission

    def IsGranted(self, role_name: Optional[str], permission: str) -> bool:
        """
        Check whether a role holds a permission

        Args:
            role_name: Role name (None for users without a role)
            permission: Permission name

        Returns:
            bool: Override value if one exists, else the configured default
        """
        if not role_name:
            return False

        role_name = role_name.upper()
        if self.IsLocked(role_name, permission):
            return True

        if not self.IsRegisteredPermission(permission):
            return False

        role_overrides = self.overrides.get(role_name, {})
        if permission in role_overrides:
            return role_overrides[permission]

        return permission in self.defaults.get(role_name, set())
