"""
RoleDesk Server - Role Protected Error Exception

Exception raised when a role cannot be removed.
"""

from .roledesk_error import RoleDeskError


class RoleProtectedError(RoleDeskError):
    """Exception raised when deleting a default role or a role still in use."""
    pass
