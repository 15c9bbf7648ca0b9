"""
RoleDesk Server - Exceptions Package

Contains the domain exception classes raised by the role administration code.
"""

from .roledesk_error import RoleDeskError
from .unknown_permission_error import UnknownPermissionError
from .role_protected_error import RoleProtectedError

__all__ = [
    'RoleDeskError',
    'UnknownPermissionError',
    'RoleProtectedError'
]
