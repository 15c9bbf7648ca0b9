"""
RoleDesk Server - API Models Package

This package contains Pydantic models for form and API payloads.
"""

from models.api.role_management import RoleForm

__all__ = [
    'RoleForm',
]
