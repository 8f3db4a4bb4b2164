import logging
import uuid
from fastapi import HTTPException
from app.db.unit_of_work import UnitOfWork
from app.models.schemas import OperatorCreate
from app.utils.auth import create_token
from app.utils.helper import utc_now

logger = logging.getLogger(__name__)


async def create_operator(operator: OperatorCreate):
    operator_id = str(uuid.uuid4())

    with UnitOfWork() as uow:
        row = uow.operators.create(operator_id, operator.name, operator.is_admin, utc_now())

    logger.info("Created operator %s (admin=%s)", operator_id, operator.is_admin)
    return row


async def list_operators():
    with UnitOfWork() as uow:
        operators = uow.operators.list_all()
    return operators


async def issue_token(operator_id: str):

    with UnitOfWork() as uow:
        operator = uow.operators.get_by_id(operator_id)

    if not operator:
        raise HTTPException(status_code=404, detail="Operator not found")

    return {
        "access_token": create_token(operator["id"], operator["is_admin"]),
        "token_type": "bearer"
    }


async def login_admin(username: str):
    """Ensures the configured admin has a profile and returns a token for it."""
    with UnitOfWork() as uow:
        operator = uow.operators.ensure_admin(username, utc_now())

    logger.info("Admin %s logged in", username)
    return {
        "access_token": create_token(operator["id"], True),
        "token_type": "bearer"
    }
