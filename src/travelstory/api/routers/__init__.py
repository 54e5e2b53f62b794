"""API routers for different endpoint groups.

Routers:
- auth: Registration, login and the current user
- health: Health check endpoint
- images: Image upload and removal
- stories: Travel story management, search and filtering
"""

from .auth import router as auth_router
from .health import router as health_router
from .images import router as images_router
from .stories import router as stories_router

__all__ = [
    "auth_router",
    "health_router",
    "images_router",
    "stories_router",
]
