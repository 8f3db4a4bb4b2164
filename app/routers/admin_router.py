from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query
from app.models.schemas import (
    PhoneNumber,
    PhoneNumberCreate,
    PhoneNumberBulkCreate,
    CallHistoryEntry,
    Operator,
    OperatorCreate,
    MAX_ROW_ID,
)
from app.services import assignment_service, history_service, operator_service, pool_service
from app.utils.auth import require_admin

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/numbers", response_model=List[PhoneNumber])
async def list_numbers():
    return await pool_service.list_numbers()


@router.get("/numbers/stats")
async def pool_stats():
    return await pool_service.get_pool_stats()


@router.post("/numbers", response_model=PhoneNumber, status_code=201)
async def add_number(number: PhoneNumberCreate):
    return await pool_service.add_number(number)


@router.post("/numbers/bulk", response_model=List[PhoneNumber], status_code=201)
async def add_numbers_bulk(batch: PhoneNumberBulkCreate):
    return await pool_service.add_numbers_bulk(batch)


@router.post("/numbers/release-stale")
async def release_stale_claims():
    released = await assignment_service.release_stale_claims()
    return {"released": released}


@router.delete("/numbers/{number_id}")
async def remove_number(number_id: int = Path(..., ge=1, le=MAX_ROW_ID)):
    return await pool_service.remove_number(number_id)


@router.post("/numbers/{number_id}/release", response_model=PhoneNumber)
async def release_number(number_id: int = Path(..., ge=1, le=MAX_ROW_ID)):
    return await assignment_service.release_claim(number_id)


@router.get("/history", response_model=List[CallHistoryEntry])
async def list_history(
    operator_id: Optional[str] = Query(None),
    q: Optional[str] = Query(None)
):
    if operator_id:
        return await history_service.list_history(operator_id, q)
    return await history_service.list_all_history(q)


@router.get("/operators", response_model=List[Operator])
async def list_operators():
    return await operator_service.list_operators()


@router.post("/operators", response_model=Operator, status_code=201)
async def create_operator(operator: OperatorCreate):
    return await operator_service.create_operator(operator)


@router.post("/operators/{operator_id}/token")
async def issue_operator_token(operator_id: str):
    return await operator_service.issue_token(operator_id)
