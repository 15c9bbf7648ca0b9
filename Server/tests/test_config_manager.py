"""
Tests for configuration loading in RoleDesk Server
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from managers.config_manager import ConfigManager, DEFAULT_CONFIG, CONFIG_ENV_VAR


def test_creates_default_config_file(tmp_path):
    config_file = tmp_path / "config.json"
    manager = ConfigManager(str(config_file))
    config = manager.load_config()

    assert config_file.exists()
    assert config["manage_permission"] == "role_permissions"
    assert manager.GetPermissions() == DEFAULT_CONFIG["permissions"]


def test_super_admin_defaults_to_full_catalog(tmp_path):
    manager = ConfigManager(str(tmp_path / "config.json"))
    manager.load_config()

    defaults = manager.GetDefaultRolePermissions()
    assert defaults["ROLE_SUPER_ADMIN"] == manager.GetPermissions()
    assert "role_permissions" not in defaults["ROLE_USER"]


def test_missing_keys_filled_and_roles_uppercased(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "default_roles": ["role_super_admin", "role_auditor"],
        "permission_categories": [["Audit", "audit_"]],
    }))

    manager = ConfigManager(str(config_file))
    manager.load_config()

    assert manager.get("default_roles") == ["ROLE_SUPER_ADMIN", "ROLE_AUDITOR"]
    assert manager.GetPermissionCategories() == [("Audit", "audit_")]
    assert manager.get("session_lifetime_hours") == DEFAULT_CONFIG["session_lifetime_hours"]


def test_config_path_from_environment(tmp_path, monkeypatch):
    config_file = tmp_path / "custom.json"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))

    manager = ConfigManager()
    manager.load_config()

    assert manager.config_file == config_file
    assert config_file.exists()


def test_default_config_is_not_mutated(tmp_path):
    manager = ConfigManager(str(tmp_path / "config.json"))
    manager.load_config()
    manager.config["default_roles"].append("ROLE_EXTRA")

    assert "ROLE_EXTRA" not in DEFAULT_CONFIG["default_roles"]
