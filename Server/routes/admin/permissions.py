"""
RoleDesk Server - Admin Permission Endpoints

Pages for managing user roles and role permissions. All routes require
the manage permission (role_permissions by default).
"""

import logging
from pathlib import Path
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

import role_admin
from auth import GetPermissionManager, GetRoleService
from admin_sessions import AddFlash, PopFlashes
from exceptions import UnknownPermissionError
from managers.permission_manager import CategorizePermissions
from managers.role_repository import RoleRepository
from models.api import RoleForm
from routes.admin.auth import RequireManagePermission

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()

# Get the directory where server.py is located
script_dir = Path(__file__).parent.parent.parent

# Initialize Jinja2 templates
templates = Jinja2Templates(directory=str(script_dir / "templates"))

# Text shown for the flash message keys returned by role_admin
FLASH_MESSAGES = {
    role_admin.UPDATE_SUCCESS: "Saved changes",
    role_admin.UPDATE_ERROR: "Failed to save changes",
    role_admin.DELETE_SUCCESS: "Deleted successfully",
    role_admin.DELETE_ERROR: "Failed to delete",
}


# ==================== Helper Functions ====================

def _PopFlashMessages(session: dict) -> list:
    """Queued notices of the session as (type, text) pairs"""
    return [
        (flash_type, FLASH_MESSAGES.get(key, key))
        for flash_type, key in PopFlashes(session["session_id"])
    ]


def _RedirectWithResult(session: dict, result) -> RedirectResponse:
    """Remember the outcome for the next page and go back to the overview"""
    AddFlash(session["session_id"], result.flash_type, result.message_key)
    return RedirectResponse(url="/admin/permissions", status_code=303)


def _LoadRole(db_session, role_id: int):
    """Fetch a role or fail with 404"""
    role = RoleRepository(db_session).Find(role_id)
    if not role:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Role with ID {role_id} not found")
    return role


# ==================== Admin - Permission Management ====================

@router.api_route("/admin/permissions", methods=["GET", "POST"], response_class=HTMLResponse, tags=["Admin"])
async def admin_permissions_page(
    request: Request,
    session: dict = Depends(RequireManagePermission)
):
    """
    Display the role/permission matrix

    Missing default roles are imported into the database first.

    Args:
        request: FastAPI request object
        session: Admin session from dependency

    Returns:
        HTML permissions page
    """
    from database import db_manager, config_manager
    db_session = db_manager.GetSession()

    try:
        role_service = GetRoleService()
        repository = RoleRepository(db_session)

        try:
            role_service.ImportDefaultRoles(repository)
        except SQLAlchemyError as e:
            db_session.rollback()
            logger.error(f"Error importing default roles: {str(e)}")
            AddFlash(session["session_id"], "error", role_admin.UPDATE_ERROR)

        manager = GetPermissionManager(db_session)
        sorted_permissions = CategorizePermissions(
            manager.GetPermissions(),
            config_manager.GetPermissionCategories(),
            config_manager.get("other_category")
        )

        context = {
            "show_nav": True,
            "active_page": "permissions",
            "username": session["username"],
            "roles": role_service.SortRolesForDisplay(repository.FindAll()),
            "permissions": manager.GetPermissions(),
            "sorted": sorted_permissions,
            "manager": manager,
            "system_roles": role_service.GetSystemRoles(),
            "flashes": _PopFlashMessages(session)
        }

        return templates.TemplateResponse(request, "permissions.html", context)

    finally:
        db_session.close()


@router.api_route("/admin/permissions/roles/create", methods=["GET", "POST"], response_class=HTMLResponse, tags=["Admin"])
async def admin_create_role(
    request: Request,
    session: dict = Depends(RequireManagePermission)
):
    """
    Show the create role form and handle its submission

    Args:
        request: FastAPI request object
        session: Admin session from dependency

    Returns:
        Redirect to the permissions page after a valid submission, the form otherwise
    """
    from database import db_manager

    name = ""
    errors = []

    if request.method == "POST":
        form_data = await request.form()
        name = str(form_data.get("name", ""))

        db_session = db_manager.GetSession()
        try:
            try:
                form = RoleForm(name=name)
            except ValidationError as e:
                errors = [error["msg"].removeprefix("Value error, ") for error in e.errors()]
            else:
                errors = role_admin.ValidateNewRole(db_session, form)

            if not errors:
                result = role_admin.CreateRole(db_session, form)
                logger.info(f"Admin '{session['username']}' created role '{form.name}': {result.message_key}")
                return _RedirectWithResult(session, result)
        finally:
            db_session.close()

    context = {
        "show_nav": True,
        "active_page": "permissions",
        "username": session["username"],
        "name": name,
        "errors": errors
    }
    status_code = status.HTTP_400_BAD_REQUEST if errors else status.HTTP_200_OK

    return templates.TemplateResponse(request, "edit_role.html", context, status_code=status_code)


@router.api_route("/admin/permissions/roles/{role_id}/delete", methods=["GET", "POST"], tags=["Admin"])
async def admin_delete_role(
    role_id: int,
    session: dict = Depends(RequireManagePermission)
):
    """
    Delete a role and its permission overrides

    Args:
        role_id: Role ID to delete
        session: Admin session from dependency

    Returns:
        Redirect to the permissions page
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        role = _LoadRole(db_session, role_id)
        result = role_admin.DeleteRole(db_session, GetRoleService(), role)

        logger.info(f"Admin '{session['username']}' deleted role ID {role_id}: {result.message_key}")
        return _RedirectWithResult(session, result)

    finally:
        db_session.close()


@router.get("/admin/permissions/roles/{role_id}/{name}/{value}", tags=["Admin"])
async def admin_save_permission(
    role_id: int,
    name: str,
    value: str,
    session: dict = Depends(RequireManagePermission)
):
    """
    Allow or deny one permission for one role

    Args:
        role_id: Role ID
        name: Permission name
        value: "1" to allow, "0" to deny
        session: Admin session from dependency

    Returns:
        Redirect to the permissions page, 404 for unknown roles or permissions
    """
    from database import db_manager
    db_session = db_manager.GetSession()

    try:
        role = _LoadRole(db_session, role_id)
        manager = GetPermissionManager(db_session)

        try:
            result = role_admin.SavePermission(db_session, manager, role, name, value)
        except UnknownPermissionError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        logger.info(f"Admin '{session['username']}' set '{name}' for role '{role.role_name}': {result.message_key}")
        return _RedirectWithResult(session, result)

    finally:
        db_session.close()
