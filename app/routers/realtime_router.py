import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from app.models.schemas import FEED_TABLES, HISTORY_TABLE
from app.realtime.feed import change_feed
from app.utils.auth import operator_from_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])


@router.websocket("/ws/changes/{table}")
async def table_changes(
    websocket: WebSocket,
    table: str,
    token: str = Query(...),
    column: Optional[str] = Query(None),
    value: Optional[str] = Query(None),
):
    try:
        operator = operator_from_token(token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    if table not in FEED_TABLES or (column is None) != (value is None):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    # Operators only ever see their own history
    if table == HISTORY_TABLE and not operator.is_admin:
        column, value = "operator_id", operator.id

    loop = asyncio.get_running_loop()
    queue = asyncio.Queue()

    # Subscribe before accepting so no event between handshake and subscribe is lost
    subscription = change_feed.subscribe(
        table,
        lambda event: loop.call_soon_threadsafe(queue.put_nowait, event),
        column=column,
        value=value,
    )

    async def wait_for_disconnect():
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    watcher = None
    try:
        await websocket.accept()
        logger.info("Operator %s subscribed to %s", operator.id, table)

        watcher = asyncio.create_task(wait_for_disconnect())

        while not watcher.done():
            getter = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {getter, watcher},
                return_when=asyncio.FIRST_COMPLETED
            )

            if getter in done:
                await websocket.send_json(getter.result().model_dump(mode="json"))
            else:
                getter.cancel()
    except WebSocketDisconnect:
        pass
    finally:
        subscription.cancel()
        if watcher is not None:
            watcher.cancel()
        logger.info("Operator %s unsubscribed from %s", operator.id, table)
