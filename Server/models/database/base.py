"""
RoleDesk Server - Database Base

Shared declarative base for all SQLAlchemy models.
Roles, role permissions and users all hang off the same metadata.
"""

from sqlalchemy.orm import declarative_base

# Create the shared declarative base
Base = declarative_base()
