"""
system.py

System-level routes. Used by the container HEALTHCHECK.
No authentication required.
"""

from fastapi import APIRouter

from hello_app.core.config import SERVICE_NAME

# Create a router object
router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """
    Health check endpoint.
    """
    return {
        "status": "ok",
        "service": SERVICE_NAME
    }
