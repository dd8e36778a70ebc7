"""FastAPI web server streaming live navigation records.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

WebSocket clients connect to ``ws://<host>:8000/ws`` and receive one
``type="navigation"`` JSON message per record update, i.e. per accepted GGA
or VTG sentence.
"""

import asyncio
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from navsense.gnss import GNSSReceiver
from server.broadcaster import NavigationBroadcaster
from server.sensors import run_gnss_receiver

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    loop = asyncio.get_running_loop()
    receiver = GNSSReceiver()
    broadcaster = NavigationBroadcaster()
    application.state.broadcaster = broadcaster
    executor = ThreadPoolExecutor(max_workers=1)
    loop.run_in_executor(executor, run_gnss_receiver, loop, receiver, broadcaster)
    yield
    receiver.cancel()
    executor.shutdown(wait=False)


app = FastAPI(lifespan=_lifespan)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream navigation JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages),
    primed with the latest record if one has been received. The oldest
    message is dropped when the queue is full so slow clients do not stall
    the receiver thread. The connection closes with code 1001, and the client
    should reconnect, if no message arrives within ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    broadcaster: NavigationBroadcaster = websocket.app.state.broadcaster
    await websocket.accept()
    queue = broadcaster.subscribe(_QUEUE_MAX_SIZE)
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        broadcaster.unsubscribe(queue)
