from __future__ import annotations

import logging
import random
import threading
from collections.abc import Iterable, Sequence

from puzzle_room.engine.catalog import TERMINAL_LOCK_ID, default_locks, default_tools
from puzzle_room.engine.inventory import Inventory
from puzzle_room.engine.locks import LockGraph, LockNode
from puzzle_room.engine.noise import generator_for_locks
from puzzle_room.engine.tools import ToolDescriptor, ToolRegistry
from puzzle_room.engine.transcript import TranscriptLog
from puzzle_room.engine.views import LockView, SessionPhase, ToolInfo
from puzzle_room.fsm import SessionFSM

logger = logging.getLogger(__name__)

DEFAULT_NOISE_TOOL_COUNT = 50


class PuzzleEngine:
    """One puzzle session: locks, tools, inventory and transcript.

    The only mutating entry point is `execute_tool`. Each call dispatches once
    and always records exactly two transcript lines (the invocation echo and
    the raw result), whatever the outcome.
    """

    def __init__(
        self,
        *,
        locks: Iterable[LockNode],
        tools: Iterable[ToolDescriptor],
        rng: random.Random,
        noise_tool_count: int = DEFAULT_NOISE_TOOL_COUNT,
        terminal_lock_id: str = TERMINAL_LOCK_ID,
    ) -> None:
        self.locks = LockGraph(locks)
        if terminal_lock_id not in self.locks:
            raise ValueError(f"Unknown terminal lock: {terminal_lock_id}")

        self.inventory = Inventory()
        self.transcript = TranscriptLog()
        self.registry = ToolRegistry(locks=self.locks, inventory=self.inventory)

        for tool in tools:
            self.registry.register(tool)
        self.noise_tools = generator_for_locks(self.locks.ids()).populate(
            self.registry, rng=rng, count=noise_tool_count
        )

        self.fsm = SessionFSM(self.locks, terminal_lock_id=terminal_lock_id)
        self._call_lock = threading.Lock()

    @classmethod
    def default(cls, *, seed: int, noise_tool_count: int = DEFAULT_NOISE_TOOL_COUNT) -> "PuzzleEngine":
        return cls(
            locks=default_locks(),
            tools=default_tools(),
            rng=random.Random(seed),
            noise_tool_count=noise_tool_count,
        )

    @property
    def phase(self) -> SessionPhase:
        return self.fsm.phase

    @property
    def is_escaped(self) -> bool:
        return self.phase == SessionPhase.escaped

    def execute_tool(self, name: str, args: Sequence[str] = ()) -> str:
        args = [str(a) for a in args]

        with self._call_lock:
            result = self.registry.dispatch(name, args)
            self.transcript.record_invocation(name, args, result)
            self.fsm.sync()

        logger.debug("execute_tool name=%s argc=%d transcript_len=%d", name, len(args), len(self.transcript))
        return result

    def tool_catalog(self) -> list[ToolInfo]:
        return self.registry.catalog()

    def lock_views(self) -> list[LockView]:
        return self.locks.views()
