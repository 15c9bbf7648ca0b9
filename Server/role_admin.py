"""
RoleDesk Server - Role Administration

Operations behind the permission admin pages. Each returns an ActionResult
instead of touching the response, so the routes decide how to render it.

Persistence failures are logged and reported as a failed result;
an unknown permission name raises UnknownPermissionError.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from exceptions import UnknownPermissionError, RoleProtectedError
from managers.role_repository import RoleRepository
from managers.role_permission_repository import RolePermissionRepository
from models.api import RoleForm
from models.database import Role, RolePermission
from models.infrastructure import ActionResult

logger = logging.getLogger(__name__)

UPDATE_SUCCESS = "action.update.success"
UPDATE_ERROR = "action.update.error"
DELETE_SUCCESS = "action.delete.success"
DELETE_ERROR = "action.delete.error"


def ParsePermissionValue(value: str) -> bool:
    """
    Boolean reading of the value segment of the toggle URL

    "0" and the empty string are false, everything else is true.
    """
    return value not in ("", "0")


def SavePermission(db_session, manager, role: Role, name: str, value: str) -> ActionResult:
    """
    Set the allowed flag of one permission for one role

    Creates the (role, permission) row on first use and updates it afterwards.

    Args:
        db_session: SQLAlchemy session
        manager: RolePermissionManager holding the permission catalog
        role: Role to change
        name: Permission name
        value: Raw value from the URL

    Returns:
        ActionResult: Update success or failure

    Raises:
        UnknownPermissionError: If the permission is not registered (nothing is written)
    """
    if not manager.IsRegisteredPermission(name):
        raise UnknownPermissionError(name)

    if manager.IsLocked(role.role_name, name):
        logger.warning(f"Refused to change locked permission '{name}' for role '{role.role_name}'")
        return ActionResult.Failed(UPDATE_ERROR)

    repository = RolePermissionRepository(db_session)
    allowed = ParsePermissionValue(value)

    try:
        permission = repository.FindRolePermission(role, name)
        if permission is None:
            permission = RolePermission(role=role, permission=name)
        permission.allowed = allowed

        repository.SaveRolePermission(permission)
    except SQLAlchemyError as e:
        db_session.rollback()
        logger.error(f"Error saving permission '{name}' for role '{role.role_name}': {str(e)}")
        return ActionResult.Failed(UPDATE_ERROR)

    logger.info(f"Set permission '{name}' for role '{role.role_name}' to {allowed}")
    return ActionResult.Ok(UPDATE_SUCCESS)


def ValidateNewRole(db_session, form: RoleForm) -> list:
    """
    Checks that need the database (form-level checks live in RoleForm)

    Returns:
        list: Error messages, empty if the role can be created
    """
    if RoleRepository(db_session).FindByName(form.name):
        return [f"Role '{form.name}' already exists"]
    return []


def CreateRole(db_session, form: RoleForm) -> ActionResult:
    """
    Persist a new role from a validated form

    Args:
        db_session: SQLAlchemy session
        form: Bound and validated RoleForm

    Returns:
        ActionResult: Update success or failure
    """
    role = Role()
    role.SetName(form.name)

    try:
        RoleRepository(db_session).SaveRole(role)
    except SQLAlchemyError as e:
        logger.error(f"Error creating role '{form.name}': {str(e)}")
        return ActionResult.Failed(UPDATE_ERROR)

    logger.info(f"Created role '{role.role_name}' (ID: {role.role_id})")
    return ActionResult.Ok(UPDATE_SUCCESS)


def DeleteRole(db_session, role_service, role: Role) -> ActionResult:
    """
    Delete a role; its permission overrides go with it

    System roles and roles still assigned to users are kept.

    Args:
        db_session: SQLAlchemy session
        role_service: RoleService knowing the system roles
        role: Role to delete

    Returns:
        ActionResult: Delete success or failure
    """
    repository = RoleRepository(db_session)
    role_name = role.role_name

    try:
        if role_service.IsSystemRole(role_name):
            raise RoleProtectedError(f"Cannot delete system role '{role_name}'")

        user_count = repository.CountUsers(role)
        if user_count:
            raise RoleProtectedError(f"Cannot delete role '{role_name}': {user_count} user(s) are assigned to it")

        repository.DeleteRole(role)
    except (RoleProtectedError, SQLAlchemyError) as e:
        logger.error(f"Error deleting role '{role_name}': {str(e)}")
        return ActionResult.Failed(DELETE_ERROR)

    logger.info(f"Deleted role '{role_name}'")
    return ActionResult.Ok(DELETE_SUCCESS)
