"""API v1 routes."""

from fastapi import APIRouter

from devconsole.api.v1 import activity, auth, catalog, dashboard, health, pages, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(pages.router, prefix="/pages", tags=["pages"])
router.include_router(activity.router, tags=["activity"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
