"""
RoleDesk Server - Infrastructure Models Package

This package contains dataclass models for infrastructure components
like sessions and action results.
"""

from models.infrastructure.admin_session import AdminSession
from models.infrastructure.action_result import ActionResult

__all__ = [
    'AdminSession',
    'ActionResult',
]
