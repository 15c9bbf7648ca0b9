"""
RoleDesk Server - Role Service

Knows the default (system) roles, imports them into the database when
they are missing, and orders roles for display.
"""

import logging
from typing import List, Optional

from models.database import Role

logger = logging.getLogger(__name__)


class RoleService:
    """
    Lookup and bootstrap of the known roles
    """

    def __init__(self, default_roles: List[str], display_order: Optional[List[str]] = None):
        """
        Args:
            default_roles: Role names that always exist (system roles)
            display_order: Priority list for the permissions page, defaults to default_roles
        """
        self.default_roles = [name.upper() for name in default_roles]
        self.display_order = [name.upper() for name in (display_order or default_roles)]

    def GetAvailableNames(self) -> List[str]:
        return list(self.default_roles)

    def GetSystemRoles(self) -> List[str]:
        """System roles cannot be deleted from the admin interface"""
        return list(self.default_roles)

    def IsSystemRole(self, role_name: str) -> bool:
        return role_name.upper() in self.default_roles

    def ImportDefaultRoles(self, role_repository) -> List[str]:
        """
        Create every default role missing from storage

        Names are compared case-insensitively and stored uppercase,
        so calling this repeatedly always converges to the same set.

        Args:
            role_repository: RoleRepository bound to the current session

        Returns:
            list: Names of the roles that were created
        """
        existing = [role.role_name.upper() for role in role_repository.FindAll()]
        created = []

        for role_name in self.GetAvailableNames():
            if role_name in existing:
                continue

            role = Role()
            role.SetName(role_name)
            role_repository.SaveRole(role)
            existing.append(role_name)
            created.append(role_name)
            logger.info(f"Imported default role '{role_name}'")

        return created

    def SortRolesForDisplay(self, roles: List[Role]) -> List[Role]:
        """
        Order roles from most to least powerful, custom roles at the end

        Args:
            roles: Roles in storage order

        Returns:
            list: Priority roles that exist (in priority order) followed by the rest
        """
        by_name = {role.role_name.upper(): role for role in roles}
        ordered = [by_name[name] for name in self.display_order if name in by_name]
        ordered_ids = {id(role) for role in ordered}

        return ordered + [role for role in roles if id(role) not in ordered_ids]
