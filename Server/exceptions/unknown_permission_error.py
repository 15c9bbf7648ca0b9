"""
RoleDesk Server - Unknown Permission Error Exception

Exception raised when a permission name is not part of the registered catalog.
"""

from .roledesk_error import RoleDeskError


class UnknownPermissionError(RoleDeskError):
    """Exception raised for permission names missing from the catalog."""

    def __init__(self, permission: str):
        self.permission = permission
        super().__init__(f"Unknown permission: {permission}")
