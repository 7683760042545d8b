"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from collegeez.api import api_router
    app.include_router(api_router)
"""

from collegeez.api.routes import api_router

__all__ = ["api_router"]
