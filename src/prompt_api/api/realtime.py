"""Real-time WebSocket endpoint for live workspace changes."""
import uuid
from typing import Any

import loguru
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from prompt_api.dependencies import get_broker
from prompt_api.schemas import RealtimeMessage
from prompt_api.schemas.realtime import ERROR, STOP_WATCH, WATCH_STOPPED, WATCH_WORKSPACE
from prompt_api.services import SubscriptionBroker

router = APIRouter()


class WebSocketConnection:
    """Broker-facing wrapper sending ``{"event", "data"}`` frames over a WebSocket."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self.connection_id = uuid.uuid4().hex

    async def send(self, event: str, data: dict[str, Any]) -> None:
        await self.websocket.send_json(RealtimeMessage(event=event, data=data).model_dump())


async def _handle_message(broker: SubscriptionBroker, connection: WebSocketConnection, raw: str) -> None:
    try:
        message = RealtimeMessage.model_validate_json(raw)
    except ValidationError:
        await connection.send(ERROR, {"message": "Invalid message"})
        return

    if message.event == WATCH_WORKSPACE:
        workspace_id = message.data.get("workspaceId")
        if not isinstance(workspace_id, str) or not workspace_id:
            await connection.send(ERROR, {"message": "workspaceId is required"})
            return
        await broker.watch(connection, workspace_id)
    elif message.event == STOP_WATCH:
        left = await broker.unwatch(connection)
        if left is not None:
            await connection.send(WATCH_STOPPED, {"workspaceId": left})
    else:
        await connection.send(ERROR, {"message": f"Unknown event: {message.event}"})


@router.websocket("/ws")
async def realtime_endpoint(websocket: WebSocket, broker: SubscriptionBroker = Depends(get_broker)):
    """One live connection; watches at most one workspace at a time."""
    await websocket.accept()
    connection = WebSocketConnection(websocket)
    loguru.logger.info(f"WebSocket client connected: {connection.connection_id}")

    try:
        while True:
            raw = await websocket.receive_text()
            await _handle_message(broker, connection, raw)
    except WebSocketDisconnect:
        loguru.logger.info(f"WebSocket client disconnected: {connection.connection_id}")
    finally:
        await broker.disconnect(connection)
