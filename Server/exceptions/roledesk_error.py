"""
RoleDesk Server - Base Error Exception

Base exception class for all role administration errors.
"""


class RoleDeskError(Exception):
    """Base exception for role administration errors."""
    pass
