"""
RoleDesk Server - RolePermission Repository

Persistence for the per-role permission overrides.
"""

from typing import Optional, Dict

from models.database import Role, RolePermission


class RolePermissionRepository:
    """
    Find and save RolePermission rows, keyed by (role, permission)
    """

    def __init__(self, session):
        self.session = session

    def FindRolePermission(self, role: Role, permission: str) -> Optional[RolePermission]:
        return self.session.query(RolePermission).filter(
            RolePermission.role_id == role.role_id,
            RolePermission.permission == permission
        ).first()

    def GetOverrides(self) -> Dict[str, Dict[str, bool]]:
        """
        All overrides as {role_name: {permission: allowed}}

        Returns:
            dict: Nested mapping used by RolePermissionManager
        """
        overrides: Dict[str, Dict[str, bool]] = {}
        rows = self.session.query(RolePermission, Role.role_name).join(
            Role, RolePermission.role_id == Role.role_id
        ).all()

        for row, role_name in rows:
            overrides.setdefault(role_name, {})[row.permission] = bool(row.allowed)

        return overrides

    def SaveRolePermission(self, permission: RolePermission) -> RolePermission:
        """
        Insert or update a RolePermission and commit

        Raises:
            SQLAlchemyError: If the commit fails (the session is rolled back)
        """
        try:
            self.session.add(permission)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        return permission
