# backend/app/api/realtime_routes.py

import logging
from typing import Optional

from fastapi import APIRouter, WebSocket, status
from starlette.websockets import WebSocketDisconnect

from app.core.errors import InvalidTokenError
from app.core.security import decode_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def push_channel(websocket: WebSocket, token: Optional[str] = None):
    """Server-to-client change feed. Anything the client sends is ignored."""
    settings = websocket.app.state.settings
    broadcaster = websocket.app.state.broadcaster

    try:
        claims = decode_token(token or "", settings)
    except InvalidTokenError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    # only accepted sockets are visible to publish
    broadcaster.connect(websocket)
    try:
        logger.info("Push channel opened for user %s", claims.id)
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
