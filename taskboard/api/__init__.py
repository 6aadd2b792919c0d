"""API routes, mounted under API_PREFIX."""

from fastapi import APIRouter

from taskboard.api import auth, groups, health, tasks, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(tasks.router, tags=["tasks"])
router.include_router(groups.router, tags=["groups"])
router.include_router(users.router, tags=["users"])
