"""
RoleDesk Server - Managers Package

This package contains the configuration, database, repository and
permission manager classes.
"""

from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager
from managers.role_repository import RoleRepository
from managers.role_permission_repository import RolePermissionRepository
from managers.role_service import RoleService
from managers.permission_manager import RolePermissionManager, CategorizePermissions

__all__ = [
    'ConfigManager',
    'DatabaseManager',
    'RoleRepository',
    'RolePermissionRepository',
    'RoleService',
    'RolePermissionManager',
    'CategorizePermissions',
]
