"""
RoleDesk Server - Status Endpoints

Health check endpoint for monitoring.
"""

from datetime import datetime, timezone
from fastapi import APIRouter


# Create router instance
router = APIRouter()


# ==================== Health Check Endpoint ====================

@router.get("/status", tags=["Status"])
async def health_check():
    """
    Health check endpoint to verify server is running

    Returns:
        dict: Server status information
    """
    return {
        "status": "healthy",
        "service": "RoleDesk Server",
        "version": "1.0.0",
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }
