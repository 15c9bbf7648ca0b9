"""
RoleDesk Server - Admin Session Management

In-memory cookie sessions for the admin pages, lost on restart.
Each session also queues the flash notices for its next page render.
"""

import secrets
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, List, Tuple

from models.infrastructure import AdminSession

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "admin_session"

_sessions: Dict[str, AdminSession] = {}


def _PruneExpired() -> None:
    for session_id in [key for key, value in _sessions.items() if value.IsExpired()]:
        del _sessions[session_id]


def CreateSession(user_id: int, username: str, lifetime_hours: int) -> AdminSession:
    """
    Start a session for a logged in user; expired sessions are dropped first

    Returns:
        AdminSession holding the new random session ID
    """
    _PruneExpired()

    now = datetime.now(timezone.utc)
    session = AdminSession(
        session_id=secrets.token_urlsafe(32),
        user_id=user_id,
        username=username,
        created_at_utc=now,
        expires_at_utc=now + timedelta(hours=lifetime_hours)
    )
    _sessions[session.session_id] = session

    logger.info(f"Admin session started for '{username}' ({lifetime_hours}h)")
    return session


def GetSession(session_id: Optional[str]) -> Optional[AdminSession]:
    """Live session for the cookie value, or None when unknown or expired"""
    session = _sessions.get(session_id) if session_id else None
    if session and session.IsExpired():
        del _sessions[session_id]
        return None
    return session


def DeleteSession(session_id: str) -> None:
    if _sessions.pop(session_id, None):
        logger.info("Admin session ended")


def AddFlash(session_id: str, flash_type: str, message_key: str) -> None:
    """Queue a ("success" | "error", message key) notice for the next page"""
    session = GetSession(session_id)
    if session:
        session.flashes.append((flash_type, message_key))


def PopFlashes(session_id: str) -> List[Tuple[str, str]]:
    """Return and clear the queued notices of a session"""
    session = GetSession(session_id)
    if not session:
        return []

    flashes, session.flashes = session.flashes, []
    return flashes
