"""
RoleDesk Server - Admin Authentication Endpoints

This module contains admin web interface authentication endpoints
(login, logout) and the session dependencies used by the admin pages.
"""

import logging
from typing import Optional
from pathlib import Path
from fastapi import APIRouter, HTTPException, status, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from auth import AuthenticateUser, UserHasPermission
from admin_sessions import (
    CreateSession, GetSession, DeleteSession,
    SESSION_COOKIE_NAME
)


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()

# Get the directory where server.py is located
script_dir = Path(__file__).parent.parent.parent

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(script_dir / "templates"))


# ==================== Helper Functions ====================

def GetAdminSession(request: Request) -> Optional[dict]:
    """
    Dependency to get admin session from cookie
    Returns session info or None if not logged in
    """
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if not session_id:
        return None

    session = GetSession(session_id)
    if not session:
        return None

    return {
        "session_id": session.session_id,
        "user_id": session.user_id,
        "username": session.username
    }


def RequirePermission(permission_name: str):
    """
    Dependency factory requiring a logged in user whose role holds a permission

    Args:
        permission_name: Name of the permission required

    Returns:
        Dependency function returning the session info

    Usage:
        @router.get("/admin/something")
        async def page(session: dict = Depends(RequirePermission("role_permissions"))):
            ...
    """
    def permission_checker(request: Request) -> dict:
        """
        Raises:
            HTTPException: 303 to the login page without a session,
                           403 if the user's role lacks the permission
        """
        from database import db_manager

        session = GetAdminSession(request)
        if not session:
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                detail="Not authenticated",
                headers={"Location": "/admin/login"}
            )

        db_session = db_manager.GetSession()
        try:
            if not UserHasPermission(db_session, session['user_id'], permission_name):
                logger.warning(f"User '{session['username']}' denied access to {request.url.path}")
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Access denied"
                )
        finally:
            db_session.close()

        return session

    return permission_checker


def RequireManagePermission(request: Request) -> dict:
    """Dependency for pages that manage role permissions"""
    from database import config_manager

    return RequirePermission(config_manager.get("manage_permission"))(request)


# ==================== Admin Authentication Endpoints ====================

@router.get("/admin", response_class=RedirectResponse, tags=["Admin"])
async def admin_root(request: Request):
    """Redirect /admin to the permissions page or the login page"""
    if not GetAdminSession(request):
        return RedirectResponse(url="/admin/login", status_code=303)
    return RedirectResponse(url="/admin/permissions", status_code=303)


@router.get("/admin/login", response_class=HTMLResponse, tags=["Admin"])
async def admin_login_page(request: Request):
    """
    Display admin login page

    Returns:
        HTML login form
    """
    if GetAdminSession(request):
        return RedirectResponse(url="/admin/permissions", status_code=303)

    return templates.TemplateResponse(
        request,
        "login.html",
        {"show_nav": False, "error": None}
    )


@router.post("/admin/login", response_class=HTMLResponse, tags=["Admin"])
async def admin_login_submit(
    request: Request,
    username: str = Form(...),
    password: str = Form(...)
):
    """
    Process admin login form submission

    Args:
        username: Username from form
        password: Password from form

    Returns:
        Redirect to the permissions page on success, login form with error on failure
    """
    from database import db_manager, config_manager

    user = AuthenticateUser(db_manager, username, password)

    if not user:
        logger.warning(f"Failed admin login for '{username}'")
        return templates.TemplateResponse(
            request,
            "login.html",
            {"show_nav": False, "error": "Invalid username or password"},
            status_code=status.HTTP_401_UNAUTHORIZED
        )

    lifetime_hours = config_manager.get("session_lifetime_hours")
    session = CreateSession(user['user_id'], user['username'], lifetime_hours)

    response = RedirectResponse(url="/admin/permissions", status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_id,
        max_age=lifetime_hours * 3600,
        httponly=True,
        samesite="lax"
    )

    return response


@router.post("/admin/logout", tags=["Admin"])
@router.get("/admin/logout", tags=["Admin"])
async def admin_logout(request: Request):
    """
    Logout endpoint - clears session and redirects to login page
    Supports both GET and POST methods
    """
    session = GetAdminSession(request)
    if session:
        DeleteSession(session['session_id'])

    response = RedirectResponse(url="/admin/login", status_code=303)
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        samesite="lax"
    )

    return response
