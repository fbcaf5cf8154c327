"""Live collection snapshots over WebSocket."""

import asyncio
import logging
from contextlib import suppress
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

from suds_registry.core.dependencies import get_store
from suds_registry.store.base import DocumentStore
from suds_registry.store.collections import SUBSCRIBABLE_COLLECTIONS

router = APIRouter(prefix="/api/subscriptions", tags=["subscriptions"])

logger = logging.getLogger(__name__)


async def _forward_snapshots(websocket: WebSocket, store: DocumentStore, collection: str) -> None:
    async for documents in store.subscribe(collection):
        await websocket.send_json(
            {
                "collection": collection,
                "documents": [{**document.fields, "id": document.id} for document in documents],
            }
        )


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # Clients send nothing; receiving only detects the disconnect
    with suppress(WebSocketDisconnect):
        while True:
            await websocket.receive_text()


@router.websocket("/{collection}")
async def subscribe_collection(
    websocket: WebSocket,
    collection: str,
    store: Annotated[DocumentStore, Depends(get_store)],
) -> None:
    """Send the collection snapshot on connect and again after every committed change.

    If the snapshots stop (store or change feed failure) the socket is closed
    with 1011 so the client can reconnect.
    """
    if collection not in SUBSCRIBABLE_COLLECTIONS:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info(f"Subscription opened: collection={collection}")

    forward = asyncio.create_task(_forward_snapshots(websocket, store, collection))
    disconnect = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        await asyncio.wait({forward, disconnect}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        forward.cancel()
        disconnect.cancel()
        await asyncio.gather(forward, disconnect, return_exceptions=True)

    error = None if forward.cancelled() else forward.exception()
    if error is not None:
        logger.error(f"Subscription failed: collection={collection} error={error!r}")
        if (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        ):
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    logger.info(f"Subscription closed: collection={collection}")
