"""
Generic record endpoints. One route set serves every entity collection;
authorization happens inside RecordService, not here.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, WebSocket, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import AppException
from app.database import get_db
from app.routers.auth_deps import get_record_service
from app.services import auth as auth_service
from app.services.records import RecordService, Snapshot
from app.services.registry import EntityDefinition, collections, definition_for_collection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Records"])

# Close codes for subscriptions (application range 4000-4999)
WS_POLICY_DENIED = 4403
WS_STORE_FAILURE = 4503


def _definition(collection: str) -> EntityDefinition:
    try:
        return definition_for_collection(collection)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown collection '{collection}'. Expected one of: {', '.join(collections())}",
        )


def _error(exc: AppException) -> Dict[str, Any]:
    error = {"msg": exc.message, "code": exc.error_code}
    if exc.details:
        error.update(exc.details)
    return {"success": False, "errors": [error]}


def _dump(snapshot: Snapshot) -> List[Dict[str, Any]]:
    return [record.model_dump(mode="json", by_alias=True) for record in snapshot]


@router.post("/{collection}", status_code=status.HTTP_201_CREATED)
def create_record(
    collection: str,
    payload: Dict[str, Any] = Body(...),
    service: RecordService = Depends(get_record_service),
):
    definition = _definition(collection)
    record = service.create(definition.entity, payload)
    return record.model_dump(mode="json", by_alias=True)


@router.get("/{collection}")
def list_records(
    collection: str,
    request: Request,
    service: RecordService = Depends(get_record_service),
):
    """Every query parameter is an exact-match filter on a record field."""
    definition = _definition(collection)
    return _dump(service.list(definition.entity, dict(request.query_params)))


@router.get("/{collection}/{record_id}")
def get_record(
    collection: str,
    record_id: str,
    service: RecordService = Depends(get_record_service),
):
    definition = _definition(collection)
    return service.get(definition.entity, record_id).model_dump(mode="json", by_alias=True)


@router.patch("/{collection}/{record_id}")
def update_record(
    collection: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    service: RecordService = Depends(get_record_service),
):
    definition = _definition(collection)
    record = service.update(definition.entity, record_id, payload)
    return record.model_dump(mode="json", by_alias=True)


@router.delete("/{collection}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    collection: str,
    record_id: str,
    service: RecordService = Depends(get_record_service),
):
    definition = _definition(collection)
    service.delete(definition.entity, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/{collection}/subscribe")
async def subscribe_records(
    websocket: WebSocket,
    collection: str,
    token: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Live query. Sends the full matching result set on connect and again after
    every committed change; other query parameters filter like the list route.
    """
    await websocket.accept()
    try:
        definition = definition_for_collection(collection)
    except KeyError:
        await websocket.close(code=WS_POLICY_DENIED, reason=f"Unknown collection '{collection}'")
        return

    identity = auth_service.resolve_identity(token)
    service = RecordService(db, identity)
    filters = {k: v for k, v in websocket.query_params.items() if k != "token"}

    try:
        snapshot = await run_in_threadpool(service.list, definition.entity, filters)
    except AppException as e:
        await websocket.send_json(_error(e))
        await websocket.close(code=WS_POLICY_DENIED)
        return

    loop = asyncio.get_running_loop()
    changed: asyncio.Queue = asyncio.Queue()
    # Mutations commit on worker threads; only a wake-up crosses into the loop
    subscription = service.feed.subscribe(
        definition.entity, lambda event: loop.call_soon_threadsafe(changed.put_nowait, event)
    )

    async def push_snapshots():
        while True:
            await changed.get()
            while not changed.empty():
                changed.get_nowait()
            try:
                latest = await run_in_threadpool(service.list, definition.entity, filters)
            except AppException as e:
                logger.warning(f"Subscription to {definition.entity.value} failed: {e.message}")
                subscription.cancel()
                await websocket.send_json(_error(e))
                await websocket.close(code=WS_STORE_FAILURE)
                return
            await websocket.send_json(_dump(latest))

    await websocket.send_json(_dump(snapshot))
    pusher = asyncio.create_task(push_snapshots())
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        subscription.cancel()
        pusher.cancel()
        for outcome in await asyncio.gather(pusher, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.error(f"Snapshot push for {definition.entity.value} failed: {outcome!r}")
        logger.info(f"Subscription to {definition.entity.value} closed for {identity.actor}")
