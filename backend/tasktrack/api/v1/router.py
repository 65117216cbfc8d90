"""API v1 router aggregator.

All v1 endpoint routers are included here and mounted at /api/v1.
"""

from fastapi import APIRouter

from tasktrack.api.v1 import auth, todos

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

router.include_router(auth.router, tags=["auth"])

# =============================================================================
# Core Resource Routers
# =============================================================================

router.include_router(todos.router, prefix="/todos", tags=["todos"])
