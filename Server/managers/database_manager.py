"""
RoleDesk Server - Database Manager

This module manages database connection, initialization, and
password handling for the admin users.
"""

import logging
import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
import bcrypt

from models.database import Base, Role, User

logger = logging.getLogger(__name__)


def _EnableSqliteForeignKeys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement so role deletes cascade in SQLite"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Manages database connection, initialization, and operations
    """

    def __init__(self, db_path: str = "database/roledesk.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure database directory exists
        db_dir = Path(db_path).parent
        if db_dir and str(db_dir) != '.':
            db_dir.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        event.listen(self.engine, "connect", _EnableSqliteForeignKeys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self, default_roles: List[str], super_admin_role: str) -> Optional[str]:
        """
        Initialize the database with all tables and default data
        Creates tables if they don't exist, imports the default roles,
        and creates a default admin user on first run.

        Args:
            default_roles: Role names that must exist
            super_admin_role: Role assigned to the generated admin user

        Returns:
            str: Generated admin password if admin user was created, None otherwise
        """
        # Import here to keep the manager free of service-level imports at module load
        from managers.role_repository import RoleRepository
        from managers.role_service import RoleService

        # Create all tables
        Base.metadata.create_all(bind=self.engine)

        session = self.SessionLocal()
        admin_password = None

        try:
            RoleService(default_roles).ImportDefaultRoles(RoleRepository(session))

            # First run: no users exist yet
            if session.query(User).count() == 0:
                admin_role = session.query(Role).filter(Role.role_name == super_admin_role.upper()).first()

                admin_password = self.GenerateRandomPassword()
                admin_user = User(
                    username="admin",
                    password_hash=self.HashPassword(admin_password),
                    role_id=admin_role.role_id if admin_role else None,
                    created_at=datetime.now(timezone.utc),
                    is_active=True
                )
                session.add(admin_user)
                logger.info("Created default admin user 'admin'")

            session.commit()

        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

        return admin_password

    @staticmethod
    def GenerateRandomPassword(length: int = 12) -> str:
        """
        Generate a secure random password

        Args:
            length: Password length (default 12)

        Returns:
            str: Generated password
        """
        alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
        return ''.join(secrets.choice(alphabet) for _ in range(length))

    @staticmethod
    def HashPassword(password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()
