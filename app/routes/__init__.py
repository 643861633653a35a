from fastapi import APIRouter

from .admin import router as admin_router
from .guest import router as guest_router

api_router = APIRouter()
api_router.include_router(admin_router, tags=["admin"])
api_router.include_router(guest_router, tags=["guest"])
