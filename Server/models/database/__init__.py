"""
RoleDesk Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.role import Role
from models.database.role_permission import RolePermission
from models.database.user import User

# Export all models and Base
__all__ = [
    'Base',
    'Role',
    'RolePermission',
    'User',
]
