from fastapi import APIRouter

from ideaboard.api.auth import router as auth_router
from ideaboard.api.ideas import router as ideas_router
from ideaboard.api.users import router as users_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(ideas_router, prefix="/ideas", tags=["ideas"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
