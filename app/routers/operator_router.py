from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query
from app.models.schemas import PhoneNumber, CompleteRequest, CallHistoryEntry, Operator, MAX_ROW_ID
from app.services import assignment_service, history_service
from app.utils.auth import verify_token

router = APIRouter(prefix="/api", tags=["Operator"])


@router.get("/me", response_model=Operator)
async def me(operator: Operator = Depends(verify_token)):
    return operator


@router.post("/numbers/next", response_model=Optional[PhoneNumber])
async def claim_next_number(operator: Operator = Depends(verify_token)):
    return await assignment_service.claim_next(operator.id)


@router.post("/numbers/{number_id}/complete", response_model=CallHistoryEntry)
async def complete_number(
    data: CompleteRequest,
    number_id: int = Path(..., ge=1, le=MAX_ROW_ID),
    operator: Operator = Depends(verify_token)
):
    return await assignment_service.complete(number_id, operator.id, data.outcome)


@router.get("/history", response_model=List[CallHistoryEntry])
async def my_history(
    q: Optional[str] = Query(None, description="Substring of name or phone number"),
    operator: Operator = Depends(verify_token)
):
    return await history_service.list_history(operator.id, q)
