from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.config import settings
from .dependencies import get_current_user

router = APIRouter(tags=["pages"])


@router.get("/")
async def home():
    return {"message": f"{settings.app_name} running"}


@router.get("/login")
async def login_page():
    return {"message": "POST email and password to /api/auth/callback/credentials"}


@router.get("/register")
async def register_page():
    return {"message": "POST email and password to /api/auth/register"}


@router.get("/dashboard")
async def dashboard(user: Dict[str, Any] = Depends(get_current_user)):
    return {"user": user}
