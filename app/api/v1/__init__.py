"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admins, auth, health, members, news

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(news.public_router, prefix="/news", tags=["news"])
router.include_router(members.public_router, prefix="/members", tags=["members"])
router.include_router(news.admin_router, prefix="/admin/news", tags=["admin"])
router.include_router(members.admin_router, prefix="/admin/members", tags=["admin"])
router.include_router(admins.router, prefix="/super-admin/admins", tags=["super-admin"])
