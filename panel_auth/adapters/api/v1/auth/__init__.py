from __future__ import annotations

"""Password reset router package."""

from fastapi import APIRouter

from .routes import reset_password as reset_password_route

router = APIRouter(prefix="/password-reset", tags=["auth"])

router.include_router(reset_password_route.router, prefix="/reset")

__all__ = ["router"]
