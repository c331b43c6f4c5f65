from __future__ import annotations

import asyncio
from collections import defaultdict

from fastapi import WebSocket

from puzzle_room.api.models import PuzzleSnapshot


class SessionWebSocketHub:
    """In-process WebSocket fan-out keyed by session_id.

    Rendering clients subscribe to a session and get a small `session_updated`
    event after every tool call; they re-read the snapshot over REST.
    """

    def __init__(self) -> None:
        self._by_session: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, session_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._by_session[session_id].add(websocket)

    async def disconnect(self, session_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            conns = self._by_session.get(session_id)
            if not conns:
                return
            conns.discard(websocket)
            if not conns:
                self._by_session.pop(session_id, None)

    async def publish_snapshot(self, snapshot: PuzzleSnapshot) -> None:
        sid = str(snapshot.session_id)
        await self.broadcast(
            sid,
            {
                "type": "session_updated",
                "session_id": sid,
                "phase": snapshot.phase.value,
                "transcript_len": len(snapshot.transcript),
            },
        )

    async def broadcast(self, session_id: str, payload: dict[str, object]) -> None:
        async with self._lock:
            conns = list(self._by_session.get(session_id, set()))

        if not conns:
            return

        dead: list[WebSocket] = []
        for ws in conns:
            try:
                await ws.send_json(payload)
            except Exception:
                dead.append(ws)

        if dead:
            async with self._lock:
                for ws in dead:
                    self._by_session.get(session_id, set()).discard(ws)


hub = SessionWebSocketHub()
