"""HTTP routes, mounted under API_PREFIX (default /api)."""

from fastapi import APIRouter

from app.api import auth, books, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(books.router, prefix="/books", tags=["books"])
