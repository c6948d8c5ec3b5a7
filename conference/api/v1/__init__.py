"""API v1 routes."""

from fastapi import APIRouter

from conference.api.v1 import admin, auth, dashboard, health, registrations, reviewers

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(registrations.router, prefix="/registrations", tags=["registrations"])
router.include_router(reviewers.router, prefix="/reviewers", tags=["reviewers"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
