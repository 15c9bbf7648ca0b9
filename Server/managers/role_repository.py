"""
RoleDesk Server - Role Repository

Persistence for Role rows. Every method works on the session it was
created with; saving and deleting commit immediately.
"""

import logging
from typing import Optional, List

from models.database import Role, User

logger = logging.getLogger(__name__)


class RoleRepository:
    """
    Find, save and delete roles
    """

    def __init__(self, session):
        self.session = session

    def FindAll(self) -> List[Role]:
        """All stored roles in storage (insertion) order"""
        return self.session.query(Role).order_by(Role.role_id).all()

    def Find(self, role_id: int) -> Optional[Role]:
        return self.session.query(Role).filter(Role.role_id == role_id).first()

    def FindByName(self, role_name: str) -> Optional[Role]:
        return self.session.query(Role).filter(Role.role_name == role_name.upper()).first()

    def CountUsers(self, role: Role) -> int:
        """Number of users currently assigned to the role"""
        return self.session.query(User).filter(User.role_id == role.role_id).count()

    def SaveRole(self, role: Role) -> Role:
        """
        Insert or update a role and commit

        Raises:
            SQLAlchemyError: If the commit fails (the session is rolled back)
        """
        try:
            self.session.add(role)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.debug(f"Saved role '{role.role_name}' (ID: {role.role_id})")
        return role

    def DeleteRole(self, role: Role) -> None:
        """
        Delete a role together with its permission overrides and commit

        Raises:
            SQLAlchemyError: If the commit fails (the session is rolled back)
        """
        try:
            self.session.delete(role)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.debug(f"Deleted role '{role.role_name}'")
