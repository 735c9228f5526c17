import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.realtime import ChatRelay, InMemoryPresenceRegistry

router = APIRouter()

presence = InMemoryPresenceRegistry()
relay = ChatRelay(presence)


@router.websocket("/chat/ws")
async def chat_socket(websocket: WebSocket):
    await websocket.accept()
    try:
        while True:
            text = await websocket.receive_text()
            try:
                message = json.loads(text)
            except ValueError:
                # Not JSON; the relay answers with an error frame.
                message = None
            await relay.handle(websocket, message)
    except WebSocketDisconnect:
        pass
    finally:
        await relay.disconnect(websocket)
