from typing import Optional
from app.db.unit_of_work import UnitOfWork
from app.utils.helper import matches_search


def filter_history(entries, query: Optional[str]):
    if not query:
        return list(entries)
    return [entry for entry in entries if matches_search(entry, query)]


async def list_history(operator_id: str, query: Optional[str] = None):
    """History of one operator, newest first."""
    with UnitOfWork() as uow:
        entries = uow.history.list_by_operator(operator_id)
    return filter_history(entries, query)


async def list_all_history(query: Optional[str] = None):
    with UnitOfWork() as uow:
        entries = uow.history.list_all()
    return filter_history(entries, query)
