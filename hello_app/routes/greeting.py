"""
greeting.py

Public routes of the hello service:
- GET /      plain-text greeting
- GET /test  deployment probe with message + version

Both are static for the life of the process. Values come from
AppSettings stored on app.state at startup.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Greeting"])


@router.get("/", response_class=PlainTextResponse)
def greeting(request: Request):
    return request.app.state.settings.greeting


@router.get("/test")
def deployment_probe(request: Request):
    """
    Used after a rollout to confirm which build is live.

    The body always has exactly two keys: message and version.
    """
    settings = request.app.state.settings
    return {
        "message": settings.message,
        "version": settings.version,
    }
