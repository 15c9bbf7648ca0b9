"""
RoleDesk Server - Database Module

This module exports the global db_manager and config_manager instances
for use across the application.
"""

from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager

# Global instances
# Initialized in server.py lifespan handler (or directly by tests)
db_manager: DatabaseManager = None
config_manager: ConfigManager = None
