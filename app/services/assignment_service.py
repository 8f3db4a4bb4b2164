import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import HTTPException
from app.config import settings
from app.db.unit_of_work import UnitOfWork
from app.models.schemas import (
    CallOutcome,
    ChangeType,
    PHONE_NUMBERS_TABLE,
    HISTORY_TABLE,
)
from app.realtime.feed import make_event
from app.utils.helper import utc_now, format_timestamp

logger = logging.getLogger(__name__)


async def claim_next(operator_id: str) -> Optional[dict]:
    """
    Claims the next eligible number for ``operator_id``.

    Returns the claimed row, or None when the pool has nothing eligible.
    A lost compare-and-set means another operator took the candidate, so the
    selection is repeated up to CLAIM_MAX_ATTEMPTS times.
    """
    for attempt in range(1, settings.CLAIM_MAX_ATTEMPTS + 1):

        with UnitOfWork() as uow:

            candidate = uow.numbers.find_claimable(operator_id)

            if not candidate:
                return None

            if uow.numbers.try_claim(candidate["id"], operator_id, utc_now()):
                claimed = uow.numbers.get_by_id(candidate["id"])
                uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.UPDATE, claimed))
                logger.info("Operator %s claimed number %s", operator_id, claimed["id"])
                return claimed

        logger.warning(
            "Operator %s lost claim race for number %s (attempt %d)",
            operator_id, candidate["id"], attempt
        )

    return None


async def complete(number_id: int, operator_id: str, outcome: CallOutcome) -> dict:
    outcome = CallOutcome(outcome)
    called_at = utc_now()

    with UnitOfWork() as uow:

        number = uow.numbers.get_by_id(number_id)

        if not number:
            raise HTTPException(status_code=404, detail="Phone number not found")

        if number["status"] is not None:
            raise HTTPException(status_code=409, detail="Phone number already completed")

        if number["assigned_to"] not in (None, operator_id):
            raise HTTPException(status_code=409, detail="Phone number is claimed by another operator")

        if not uow.numbers.finalize(number_id, operator_id, outcome.value, called_at):
            # Row changed between the read and the write
            raise HTTPException(status_code=409, detail="Phone number changed during completion")

        entry = uow.history.insert(number, operator_id, outcome.value, called_at)

        uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.UPDATE, uow.numbers.get_by_id(number_id)))
        uow.publish(make_event(HISTORY_TABLE, ChangeType.INSERT, entry))

    logger.info("Operator %s completed number %s as %s", operator_id, number_id, outcome.value)
    return entry


async def release_claim(number_id: int) -> dict:

    with UnitOfWork() as uow:

        number = uow.numbers.get_by_id(number_id)

        if not number:
            raise HTTPException(status_code=404, detail="Phone number not found")

        if uow.numbers.release(number_id):
            number = uow.numbers.get_by_id(number_id)
            uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.UPDATE, number))
            logger.info("Released claim on number %s", number_id)

    return number


async def release_stale_claims(now: Optional[datetime] = None, lease_seconds: Optional[int] = None) -> int:
    """Releases claims older than the lease. A lease of 0 disables expiry."""
    if lease_seconds is None:
        lease_seconds = settings.CLAIM_LEASE_SECONDS

    if lease_seconds <= 0:
        return 0

    now = now or datetime.now(timezone.utc)
    cutoff = format_timestamp(now - timedelta(seconds=lease_seconds))
    released = 0

    with UnitOfWork() as uow:

        for number in uow.numbers.list_stale_claims(cutoff):
            if uow.numbers.release_if_stale(number["id"], cutoff):
                uow.publish(make_event(
                    PHONE_NUMBERS_TABLE,
                    ChangeType.UPDATE,
                    uow.numbers.get_by_id(number["id"])
                ))
                logger.info(
                    "Lease expired on number %s (held by %s since %s)",
                    number["id"], number["assigned_to"], number["assigned_at"]
                )
                released += 1

    return released
