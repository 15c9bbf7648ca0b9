"""
RoleDesk Server - Role Database Model

Role model for RBAC (Role-Based Access Control).
Role names are unique and stored uppercase (e.g. ROLE_ADMIN).
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from models.database.base import Base


class Role(Base):
    """
    Roles table - stores role definitions for RBAC
    """
    __tablename__ = "roles"

    role_id = Column(Integer, primary_key=True, autoincrement=True)
    role_name = Column(String(50), unique=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationship to users
    users = relationship("User", back_populates="role")
    # Explicit permission overrides, removed together with the role
    permissions = relationship(
        "RolePermission",
        back_populates="role",
        cascade="all, delete-orphan"
    )

    def SetName(self, name: str) -> None:
        """Store the role name in its canonical uppercase form"""
        self.role_name = name.strip().upper()

    def __repr__(self) -> str:
        return f"<Role {self.role_id} {self.role_name}>"
