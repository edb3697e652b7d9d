"""Route initialization module."""

from fastapi import APIRouter

from user_api.routes.root import router as root_router
from user_api.routes.user import router as user_router

api_router = APIRouter()

api_router.include_router(root_router)
api_router.include_router(user_router)


__all__ = ["api_router"]
