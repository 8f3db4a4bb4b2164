import hmac
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from app.config import settings
from app.services import operator_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


@router.post("/login")
async def login(data: LoginRequest):
    if (
        not settings.ADMIN_USERNAME
        or not settings.ADMIN_PASSWORD
        or not hmac.compare_digest(data.username.encode(), settings.ADMIN_USERNAME.encode())
        or not hmac.compare_digest(data.password.encode(), settings.ADMIN_PASSWORD.encode())
    ):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return await operator_service.login_admin(data.username)
