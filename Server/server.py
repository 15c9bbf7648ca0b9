"""
RoleDesk Server - Main FastAPI Application

This module contains the main FastAPI application for the RoleDesk server.
It serves the admin pages for managing user roles and role permissions.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
import uvicorn

import database
from managers.config_manager import ConfigManager
from managers.database_manager import DatabaseManager

logger = logging.getLogger(__name__)


# ==================== Logging ====================

def ConfigureLogging(config_manager: ConfigManager) -> None:
    """
    Configure logging to write to both console and a rotating log file

    Args:
        config_manager: Loaded configuration (log_dir, log_level)
    """
    logs_dir = Path(config_manager.get("log_dir"))
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_filename = logs_dir / f"roledesk-server-{datetime.now().strftime('%Y-%m-%d')}.log"

    logging.basicConfig(
        level=getattr(logging, str(config_manager.get("log_level")).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            # max 10MB per file, keep 10 backup files
            RotatingFileHandler(
                log_filename,
                maxBytes=10 * 1024 * 1024,
                backupCount=10,
                encoding='utf-8'
            )
        ]
    )


def InitializeServer(config_file: str = None) -> None:
    """
    Load configuration and set up the shared database manager

    Args:
        config_file: Optional path to config.json
    """
    config_manager = ConfigManager(config_file)
    config_manager.load_config()
    database.config_manager = config_manager

    ConfigureLogging(config_manager)

    database.db_manager = DatabaseManager(config_manager.get("database_path"))

    # Creates tables and default roles; the admin user only on first run
    admin_password = database.db_manager.InitializeDatabase(
        config_manager.get("default_roles"),
        config_manager.get("super_admin_role")
    )
    if admin_password:
        logger.warning("=" * 60)
        logger.warning("NEW ADMIN USER CREATED")
        logger.warning("Username: admin")
        logger.warning(f"Password: {admin_password}")
        logger.warning("SAVE THIS PASSWORD - IT WILL NOT BE SHOWN AGAIN!")
        logger.warning("=" * 60)

    logger.info("Database initialized successfully")


# ==================== Lifespan Events ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler for startup and shutdown
    Manages configuration and database initialization
    """
    if database.db_manager is None:
        InitializeServer()

    logger.info("RoleDesk Server startup complete")

    yield

    logger.info("RoleDesk Server shutting down...")
    database.db_manager.engine.dispose()
    logger.info("Shutdown complete")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="RoleDesk Server",
    description="Admin server for user roles and role permissions",
    version="1.0.0",
    lifespan=lifespan
)

# ==================== Static Files ====================

# Get the directory where this script is located
script_dir = Path(__file__).parent

# Mount static files directory for CSS assets
app.mount("/static", StaticFiles(directory=str(script_dir / "static")), name="static")


# ==================== Import Routers ====================

from routes import status
from routes.admin import auth as admin_auth, permissions as admin_permissions


# ==================== Include Routers ====================

app.include_router(status.router)
app.include_router(admin_auth.router)
app.include_router(admin_permissions.router)


# ==================== Main Entry Point ====================

def main():
    """
    Run the server using uvicorn
    """
    InitializeServer()

    logger.info("Starting RoleDesk Server...")

    # reload=False: restart the server manually after code changes
    uvicorn.run(
        app,
        host=database.config_manager.get("host"),
        port=database.config_manager.get("port"),
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
