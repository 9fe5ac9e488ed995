"""FastAPI application — HTTP routes, WebSocket endpoint, tick driver lifecycle."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from .config import Settings, load_settings
from .connection_manager import (
    ConnectionManager, build_error_msg, build_state_msg, parse_direction, parse_intent_msg,
)
from .errors import UnknownIntentError
from .game import GameEngine
from .loop import TickDriver
from .models import Direction, GameSnapshot
from .score_store import open_store

logger = logging.getLogger(__name__)


class IntentRequest(BaseModel):
    intent: str
    direction: Optional[str] = None


class GameService:
    """Owns the engine, its tick driver and the connected clients."""

    def __init__(self, settings: Settings, store=None):
        self.settings = settings
        self.store = store if store is not None else open_store(settings.high_score_path)
        self.manager = ConnectionManager()
        self.engine = GameEngine(self.store, grid_size=settings.grid_size,
                                 on_high_score=self.persist_high_score)
        self.driver = TickDriver(self.engine, self.publish)
        self._pending_writes: set[asyncio.Task] = set()

    def persist_high_score(self, value: int):
        # Store I/O stays off the event loop
        task = asyncio.get_running_loop().create_task(
            asyncio.to_thread(self.engine.write_high_score, value)
        )
        self._pending_writes.add(task)
        task.add_done_callback(self._write_done)

    def _write_done(self, task: asyncio.Task):
        self._pending_writes.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("High score write failed", exc_info=task.exception())

    async def publish(self, snapshot: GameSnapshot):
        await self.manager.broadcast(build_state_msg(snapshot))

    async def handle_intent(self, name: str, direction: Optional[Direction] = None) -> bool:
        applied = self.engine.apply_intent(name, direction)
        if applied:
            self.driver.wake()
            await self.publish(self.engine.snapshot())
        return applied

    async def drain_writes(self):
        if self._pending_writes:
            await asyncio.gather(*self._pending_writes, return_exceptions=True)


def create_app(service: Optional[GameService] = None) -> FastAPI:
    if service is None:
        service = GameService(load_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service.driver.start()
        logger.info("Tick driver started (grid %d)", service.engine.grid_size)
        yield
        await service.driver.stop()
        await service.drain_writes()

    app = FastAPI(lifespan=lifespan)
    app.state.service = service

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.get("/api/state")
    async def get_state():
        return service.engine.snapshot().to_dict()

    @app.post("/api/intents")
    async def post_intent(body: IntentRequest):
        try:
            direction = parse_direction(body.direction)
            applied = await service.handle_intent(body.intent, direction)
        except UnknownIntentError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"applied": applied, "state": service.engine.snapshot().to_dict()}

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        await service.manager.connect(ws)
        try:
            await service.manager.send_personal(ws, build_state_msg(service.engine.snapshot()))
            while True:
                raw = await ws.receive_text()
                try:
                    name, direction = parse_intent_msg(raw)
                    await service.handle_intent(name, direction)
                except UnknownIntentError as e:
                    await service.manager.send_personal(ws, build_error_msg(str(e)))
        except WebSocketDisconnect:
            pass
        finally:
            service.manager.disconnect(ws)

    return app


app = create_app()


def run():
    import uvicorn

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Snake server starting on http://%s:%d", settings.host, settings.port)
    uvicorn.run(create_app(GameService(settings)), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
