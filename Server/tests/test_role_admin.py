"""
Tests for the role administration operations in RoleDesk Server

Covers the permission toggle, role creation and role deletion against
a temporary SQLite database.
"""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import role_admin
from exceptions import UnknownPermissionError
from managers.permission_manager import RolePermissionManager
from managers.role_permission_repository import RolePermissionRepository
from managers.role_repository import RoleRepository
from managers.role_service import RoleService
from models.api import RoleForm
from models.database import RolePermission, User


@pytest.fixture
def manager(config_manager):
    return RolePermissionManager.FromConfig(config_manager)


@pytest.fixture
def role_service(config_manager):
    return RoleService(config_manager.get("default_roles"), config_manager.get("role_display_order"))


def _role(db_session, role_name="ROLE_TEAMLEAD"):
    return RoleRepository(db_session).FindByName(role_name)


def test_parse_permission_value():
    assert role_admin.ParsePermissionValue("1") is True
    assert role_admin.ParsePermissionValue("true") is True
    assert role_admin.ParsePermissionValue("0") is False
    assert role_admin.ParsePermissionValue("") is False


def test_toggle_creates_single_row(db_session, manager):
    role = _role(db_session)

    first = role_admin.SavePermission(db_session, manager, role, "view_user", "1")
    second = role_admin.SavePermission(db_session, manager, role, "view_user", "1")

    assert first.success and second.success
    assert first.message_key == role_admin.UPDATE_SUCCESS

    rows = db_session.query(RolePermission).filter(RolePermission.role_id == role.role_id).all()
    assert len(rows) == 1
    assert rows[0].permission == "view_user"
    assert rows[0].allowed is True


def test_toggle_updates_in_place(db_session, manager):
    role = _role(db_session)

    role_admin.SavePermission(db_session, manager, role, "view_user", "1")
    role_admin.SavePermission(db_session, manager, role, "view_user", "0")

    row = RolePermissionRepository(db_session).FindRolePermission(role, "view_user")
    assert row.allowed is False
    assert db_session.query(RolePermission).count() == 1
    assert RolePermissionRepository(db_session).GetOverrides() == {"ROLE_TEAMLEAD": {"view_user": False}}


def test_unknown_permission_writes_nothing(db_session, manager):
    role = _role(db_session)

    with pytest.raises(UnknownPermissionError) as exc_info:
        role_admin.SavePermission(db_session, manager, role, "fly_to_moon", "1")

    assert str(exc_info.value) == "Unknown permission: fly_to_moon"
    assert db_session.query(RolePermission).count() == 0


def test_toggle_persistence_failure_is_reported(db_session, manager, monkeypatch):
    def failing_save(self, permission):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(RolePermissionRepository, "SaveRolePermission", failing_save)

    result = role_admin.SavePermission(db_session, manager, _role(db_session), "view_user", "1")

    assert not result.success
    assert result.message_key == role_admin.UPDATE_ERROR
    assert result.flash_type == "error"


def test_role_form_validation():
    assert RoleForm(name=" role_auditor ").name == "ROLE_AUDITOR"

    for name in ["ROLE", "ROLE-AUDITOR", "ROLE AUDITOR", "R" * 51]:
        with pytest.raises(ValidationError):
            RoleForm(name=name)


def test_create_role(db_session):
    form = RoleForm(name="role_auditor")

    assert role_admin.ValidateNewRole(db_session, form) == []
    result = role_admin.CreateRole(db_session, form)

    assert result.success
    assert _role(db_session, "ROLE_AUDITOR") is not None
    assert role_admin.ValidateNewRole(db_session, form) == ["Role 'ROLE_AUDITOR' already exists"]


def test_create_role_failure_reports_error(db_session, monkeypatch):
    def failing_save(self, role):
        raise SQLAlchemyError("locked")

    monkeypatch.setattr(RoleRepository, "SaveRole", failing_save)

    result = role_admin.CreateRole(db_session, RoleForm(name="ROLE_AUDITOR"))

    assert not result.success
    assert result.message_key == role_admin.UPDATE_ERROR


def test_delete_role_cascades_permissions(db_session, manager, role_service):
    role_admin.CreateRole(db_session, RoleForm(name="ROLE_AUDITOR"))
    role = _role(db_session, "ROLE_AUDITOR")
    role_admin.SavePermission(db_session, manager, role, "audit_view", "1")

    result = role_admin.DeleteRole(db_session, role_service, role)

    assert result.success
    assert result.message_key == role_admin.DELETE_SUCCESS
    assert _role(db_session, "ROLE_AUDITOR") is None
    assert db_session.query(RolePermission).count() == 0


def test_delete_system_role_fails(db_session, role_service):
    result = role_admin.DeleteRole(db_session, role_service, _role(db_session, "ROLE_USER"))

    assert not result.success
    assert result.message_key == role_admin.DELETE_ERROR
    assert _role(db_session, "ROLE_USER") is not None


def test_delete_role_in_use_fails(db_session, db_manager, role_service):
    role_admin.CreateRole(db_session, RoleForm(name="ROLE_AUDITOR"))
    role = _role(db_session, "ROLE_AUDITOR")
    db_session.add(User(username="auditor", password_hash=db_manager.HashPassword("secret"), role_id=role.role_id))
    db_session.commit()

    result = role_admin.DeleteRole(db_session, role_service, role)

    assert not result.success
    assert _role(db_session, "ROLE_AUDITOR") is not None


def test_locked_permission_is_not_written(db_session, manager):
    role = _role(db_session, "ROLE_SUPER_ADMIN")

    result = role_admin.SavePermission(db_session, manager, role, "role_permissions", "0")

    assert not result.success
    assert result.message_key == role_admin.UPDATE_ERROR
    assert db_session.query(RolePermission).count() == 0
