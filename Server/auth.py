"""
RoleDesk Server - Authentication Utilities

This module provides:
- Username/password authentication against the users table
- Construction of the role and permission managers for a request
- Permission checks for the logged in user
"""

from datetime import datetime, timezone
from typing import Optional

from managers.database_manager import DatabaseManager
from managers.permission_manager import RolePermissionManager
from managers.role_permission_repository import RolePermissionRepository
from managers.role_service import RoleService
from models.database import User


# ==================== Manager Construction ====================

def GetPermissionManager(db_session) -> RolePermissionManager:
    """
    Build a RolePermissionManager from the config catalog and stored overrides

    Args:
        db_session: SQLAlchemy session

    Returns:
        RolePermissionManager
    """
    from database import config_manager

    overrides = RolePermissionRepository(db_session).GetOverrides()
    return RolePermissionManager.FromConfig(config_manager, overrides)


def GetRoleService() -> RoleService:
    """Build a RoleService from the configured role catalogs"""
    from database import config_manager

    return RoleService(
        config_manager.get("default_roles"),
        config_manager.get("role_display_order")
    )


# ==================== Authentication Helper Functions ====================

def AuthenticateUser(db_manager: DatabaseManager, username: str, password: str) -> Optional[dict]:
    """
    Authenticate a user with username and password

    Args:
        db_manager: DatabaseManager instance
        username: Username
        password: Plain text password

    Returns:
        dict: User data dictionary if authentication successful, None otherwise
              Contains: user_id, username, role_name, last_login
    """
    session = db_manager.GetSession()

    try:
        user = session.query(User).filter(User.username == username).first()

        if not user:
            return None

        if not db_manager.VerifyPassword(password, user.password_hash):
            return None

        if not user.is_active:
            return None

        user.last_login = datetime.now(timezone.utc)
        session.commit()

        # Return user data as dictionary to avoid SQLAlchemy session issues
        return {
            'user_id': user.user_id,
            'username': user.username,
            'role_name': user.role.role_name if user.role else None,
            'last_login': user.last_login
        }

    finally:
        session.close()


# ==================== Permission Checking ====================

def UserHasPermission(db_session, user_id: int, permission_name: str) -> bool:
    """
    Check if a user has a specific permission

    Args:
        db_session: SQLAlchemy session
        user_id: User ID
        permission_name: Name of the permission to check (e.g. 'role_permissions')

    Returns:
        bool: True if the user is active and their role holds the permission
    """
    user = db_session.query(User).filter(User.user_id == user_id).first()
    if not user or not user.is_active or not user.role:
        return False

    return GetPermissionManager(db_session).IsGranted(user.role.role_name, permission_name)
