"""HTTP API routes, mounted under /api."""

from fastapi import APIRouter

from .router import router

api_router = APIRouter(prefix="/api")
api_router.include_router(router)

__all__ = ["api_router"]
