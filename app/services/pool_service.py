import logging
from fastapi import HTTPException
from app.db.unit_of_work import UnitOfWork
from app.models.schemas import PhoneNumberCreate, PhoneNumberBulkCreate, ChangeType, PHONE_NUMBERS_TABLE
from app.realtime.feed import make_event
from app.utils.helper import utc_now

logger = logging.getLogger(__name__)


async def add_number(number: PhoneNumberCreate):

    with UnitOfWork() as uow:
        row = uow.numbers.insert(number.phone_number, number.name, utc_now())
        uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.INSERT, row))

    logger.info("Added number %s (%s)", row["id"], row["phone_number"])
    return row


async def add_numbers_bulk(batch: PhoneNumberBulkCreate):

    with UnitOfWork() as uow:
        rows = uow.numbers.insert_bulk(batch.numbers, utc_now())
        for row in rows:
            uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.INSERT, row))

    logger.info("Added %d numbers to the pool", len(rows))
    return rows


async def remove_number(number_id: int):

    with UnitOfWork() as uow:
        row = uow.numbers.get_by_id(number_id)

        if not row:
            raise HTTPException(status_code=404, detail="Phone number not found")

        uow.numbers.delete(number_id)
        uow.publish(make_event(PHONE_NUMBERS_TABLE, ChangeType.DELETE, row))

    if row["assigned_to"]:
        logger.warning("Removed number %s while claimed by %s", number_id, row["assigned_to"])
    else:
        logger.info("Removed number %s", number_id)

    return {"status": "deleted", "id": number_id}


async def list_numbers():
    with UnitOfWork() as uow:
        numbers = uow.numbers.list_all()
    return numbers


async def get_pool_stats():
    with UnitOfWork() as uow:
        stats = uow.numbers.count_by_state()
    return stats
