"""
RoleDesk Server - Configuration Manager

Handles loading and saving server configuration from/to config.json.
Holds the role and permission catalogs used by the admin interface.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple

# Configure logging
logger = logging.getLogger(__name__)

# Environment variable that points to an alternative config file
CONFIG_ENV_VAR = "ROLEDESK_CONFIG"

_USER_PERMISSIONS = [
    "view_own_timesheet", "start_own_timesheet", "stop_own_timesheet",
    "create_own_timesheet", "edit_own_timesheet", "delete_own_timesheet",
    "export_own_timesheet",
    "view_own_profile", "edit_own_profile", "password_own_profile",
    "preferences_own_profile", "api-token_own_profile",
    "view_expense", "create_expense",
]

_TEAMLEAD_PERMISSIONS = _USER_PERMISSIONS + [
    "view_other_timesheet", "edit_other_timesheet", "export_other_timesheet",
    "view_teamlead_customer", "edit_teamlead_customer",
    "view_teamlead_project", "edit_teamlead_project",
    "view_team_customer", "view_team_project",
    "view_activity", "view_team", "view_tag",
    "view_invoice",
]

_ADMIN_PERMISSIONS = _TEAMLEAD_PERMISSIONS + [
    "create_other_timesheet", "delete_other_timesheet",
    "view_customer", "create_customer", "edit_customer", "delete_customer",
    "view_project", "create_project", "edit_project", "delete_project",
    "create_activity", "edit_activity", "delete_activity",
    "create_invoice", "manage_invoice_template",
    "view_user", "create_user", "edit_user",
    "view_other_profile", "edit_other_profile",
    "create_team", "edit_team", "delete_team",
    "manage_tag", "delete_tag",
    "edit_expense", "delete_expense",
    "task_view", "task_edit",
]

# Default configuration values
DEFAULT_CONFIG = {
    "database_path": "database/roledesk.db",
    "log_dir": "logs",
    "log_level": "INFO",
    "host": "0.0.0.0",
    "port": 8000,
    "session_lifetime_hours": 24,
    "manage_permission": "role_permissions",
    "super_admin_role": "ROLE_SUPER_ADMIN",
    # Roles created automatically when missing from the database
    "default_roles": ["ROLE_SUPER_ADMIN", "ROLE_ADMIN", "ROLE_TEAMLEAD", "ROLE_USER"],
    # Roles listed first on the permissions page, most powerful first
    "role_display_order": ["ROLE_SUPER_ADMIN", "ROLE_ADMIN", "ROLE_TEAMLEAD", "ROLE_USER"],
    "permissions": _ADMIN_PERMISSIONS + [
        "delete_user", "password_other_profile", "roles_other_profile",
        "preferences_other_profile", "api-token_other_profile",
        "role_permissions", "system_information", "system_configuration",
        "plugins", "view_reporting", "audit_view", "task_assign",
    ],
    # Order matters: a permission lands in the first category whose key it contains
    "permission_categories": [
        ["Audit", "audit_"],
        ["User", "_user"],
        ["User profile (own)", "_own_profile"],
        ["User profile (other)", "_other_profile"],
        ["Customer (Teamlead)", "_teamlead_customer"],
        ["Customer (Team member)", "_team_customer"],
        ["Customer (Admin)", "_customer"],
        ["Project (Teamlead)", "_teamlead_project"],
        ["Project (Team member)", "_team_project"],
        ["Project (Admin)", "_project"],
        ["Activity", "_activity"],
        ["Timesheet (own)", "_own_timesheet"],
        ["Timesheet (other)", "_other_timesheet"],
        ["Invoice", "_invoice"],
        ["Teams", "_team"],
        ["Tags", "_tag"],
        ["Expense", "_expense"],
        ["Task", "task_"],
    ],
    "other_category": "Other",
    # Permissions granted when no explicit override row exists
    "default_role_permissions": {
        "ROLE_USER": _USER_PERMISSIONS,
        "ROLE_TEAMLEAD": _TEAMLEAD_PERMISSIONS,
        "ROLE_ADMIN": _ADMIN_PERMISSIONS + ["system_information"],
        "ROLE_SUPER_ADMIN": [],  # filled with the full catalog on load
    },
}


class ConfigManager:
    """
    Manages server configuration.

    Responsibilities:
    - Load/save config.json (path from argument, ROLEDESK_CONFIG or the working directory)
    - Fill missing keys from DEFAULT_CONFIG
    - Provide typed access to the role and permission catalogs
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager

        Args:
            config_file: Path to the JSON config file (optional)
        """
        if config_file is None:
            config_file = os.environ.get(CONFIG_ENV_VAR, str(Path.cwd() / "config.json"))

        self.config_file = Path(config_file)
        self.config: Dict[str, Any] = {}

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from config.json.
        Creates default config if file doesn't exist.

        Returns:
            Configuration dictionary
        """
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r', encoding='utf-8') as f:
                self.config = json.load(f)
            # Merge with defaults for any missing keys
            for key, value in DEFAULT_CONFIG.items():
                if key not in self.config:
                    self.config[key] = copy.deepcopy(value)
            logger.info("Configuration loaded successfully")
        else:
            logger.info(f"Configuration file not found, creating default at {self.config_file}")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            self.save_config()

        self._normalize()
        return self.config

    def save_config(self) -> None:
        """Save the current configuration to config.json"""
        if self.config_file.parent and not self.config_file.parent.exists():
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2)
        logger.debug(f"Configuration saved to {self.config_file}")

    def _normalize(self) -> None:
        """Uppercase role names and give the super admin the full catalog by default"""
        self.config["default_roles"] = [name.upper() for name in self.config["default_roles"]]
        self.config["role_display_order"] = [name.upper() for name in self.config["role_display_order"]]
        self.config["super_admin_role"] = self.config["super_admin_role"].upper()

        defaults = {
            role.upper(): list(permissions)
            for role, permissions in self.config["default_role_permissions"].items()
        }
        super_admin = self.config["super_admin_role"]
        if not defaults.get(super_admin):
            defaults[super_admin] = list(self.config["permissions"])
        self.config["default_role_permissions"] = defaults

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value

        Args:
            key: Configuration key
            default: Value returned when the key is missing

        Returns:
            Configuration value
        """
        if not self.config:
            self.load_config()
        return self.config.get(key, default)

    def GetPermissions(self) -> List[str]:
        """Registered permission names in declared order"""
        return list(self.get("permissions", []))

    def GetPermissionCategories(self) -> List[Tuple[str, str]]:
        """Ordered (label, search key) pairs used to group permissions"""
        return [(label, search) for label, search in self.get("permission_categories", [])]

    def GetDefaultRolePermissions(self) -> Dict[str, List[str]]:
        """Map of role name to the permissions it holds without overrides"""
        return self.get("default_role_permissions", {})
