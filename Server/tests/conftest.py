"""
Shared fixtures for RoleDesk Server tests

Each test gets its own config file and SQLite database in a temporary directory.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import database
from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager


@pytest.fixture
def config_manager(tmp_path):
    """Default configuration stored in a temporary config.json"""
    manager = ConfigManager(str(tmp_path / "config.json"))
    manager.load_config()
    manager.config["database_path"] = str(tmp_path / "roledesk.db")
    manager.config["log_dir"] = str(tmp_path / "logs")
    return manager


@pytest.fixture
def db_manager(config_manager):
    """Initialized database; the generated admin password is kept on the manager"""
    manager = DatabaseManager(config_manager.get("database_path"))
    manager.admin_password = manager.InitializeDatabase(
        config_manager.get("default_roles"),
        config_manager.get("super_admin_role")
    )
    yield manager
    manager.engine.dispose()


@pytest.fixture
def db_session(db_manager):
    session = db_manager.GetSession()
    yield session
    session.close()


@pytest.fixture
def client(monkeypatch, config_manager, db_manager):
    """TestClient wired to the temporary database (lifespan is not run)"""
    from fastapi.testclient import TestClient
    from server import app

    monkeypatch.setattr(database, "config_manager", config_manager)
    monkeypatch.setattr(database, "db_manager", db_manager)

    return TestClient(app, follow_redirects=False)


@pytest.fixture
def admin_client(client, db_manager):
    """TestClient logged in as the generated super admin"""
    response = client.post("/admin/login", data={"username": "admin", "password": db_manager.admin_password})
    assert response.status_code == 303
    return client
