"""
RoleDesk Server - Admin Session Model

Dataclass for representing active admin sessions.
"""

from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class AdminSession:
    """Represents an active admin session"""
    session_id: str
    user_id: int
    username: str
    created_at_utc: datetime
    expires_at_utc: datetime
    # Pending (type, message key) notices shown on the next page render
    flashes: List[Tuple[str, str]] = field(default_factory=list)

    def IsExpired(self) -> bool:
        """Check if session has expired"""
        return datetime.now(timezone.utc) >= self.expires_at_utc
