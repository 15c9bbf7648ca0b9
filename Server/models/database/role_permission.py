"""
RoleDesk Server - RolePermission Database Model

Explicit override record granting or denying one permission for one role.
At most one row exists per (role, permission).
"""

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from models.database.base import Base


class RolePermission(Base):
    """
    RolePermissions table - one allowed/denied flag per (role, permission)
    """
    __tablename__ = "role_permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "permission", name="uq_role_permission"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(Integer, ForeignKey("roles.role_id", ondelete="CASCADE"), nullable=False)
    permission = Column(String(50), nullable=False)
    allowed = Column(Boolean, nullable=False, default=False)

    role = relationship("Role", back_populates="permissions")
