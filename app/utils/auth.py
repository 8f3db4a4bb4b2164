import logging
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from app.config import settings
from app.db.unit_of_work import UnitOfWork
from app.models.schemas import Operator

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def _unauthorized(detail: str):
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_token(operator_id: str, is_admin: bool = False):
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "type": "access",
        "sub": operator_id,
        "is_admin": is_admin,
        "exp": expire
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError:
        raise _unauthorized("Invalid or expired token")

    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    if not payload.get("sub"):
        raise _unauthorized("Token has no subject")

    return payload


def operator_from_token(token: str) -> Operator:
    """Resolve a token to a stored operator profile; the profile is the source of truth for is_admin."""
    payload = decode_token(token)

    with UnitOfWork() as uow:
        operator = uow.operators.get_by_id(payload["sub"])

    if not operator:
        logger.warning("Token presented for unknown operator %s", payload["sub"])
        raise _unauthorized("Unknown operator")

    return Operator(**operator)


def verify_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> Operator:
    if credentials is None:
        raise _unauthorized("Not authenticated")

    return operator_from_token(credentials.credentials)


def require_admin(operator: Operator = Depends(verify_token)) -> Operator:
    if not operator.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return operator
