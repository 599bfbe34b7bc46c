"""
API v1 router aggregation
Combines all v1 route handlers into a single router
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from reviewhub.api.v1.routes import auth, business, health, review, user
from reviewhub.core.config import settings


# Create main API router for v1
# All v1 routes will be prefixed with /api/v1
api_router = APIRouter(prefix=settings.API_V1_PREFIX)

# Include route modules
# Each route module is added as a sub-router
api_router.include_router(business.router)
api_router.include_router(review.router)
api_router.include_router(user.router)
api_router.include_router(auth.router)
api_router.include_router(health.router)
