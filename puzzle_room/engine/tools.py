from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from puzzle_room.engine.inventory import Inventory
from puzzle_room.engine.locks import AttemptOutcome, LockGraph
from puzzle_room.engine.views import ToolInfo

logger = logging.getLogger(__name__)


class DuplicateToolError(ValueError):
    pass


class ToolKind(StrEnum):
    query = "query"
    attempt = "attempt"
    noise = "noise"


@dataclass(frozen=True, slots=True)
class InventoryGrant:
    """Item handed out the first time the owning lock is solved."""

    item: str
    message: str


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """A named tool as plain data.

    - query: returns `text`, no mutation.
    - attempt: submits `args[0]` to `lock_id` (or the lock's own answer when
      `auto_answer` is set, returning `text` once the lock is open).
    - noise: decoy, returns `text`, no mutation.
    """

    name: str
    description: str
    kind: ToolKind
    text: str = ""
    lock_id: str | None = None
    auto_answer: bool = False
    grant: InventoryGrant | None = None

    @classmethod
    def query(cls, name: str, description: str, text: str) -> "ToolDescriptor":
        return cls(name=name, description=description, kind=ToolKind.query, text=text)

    @classmethod
    def attempt(
        cls,
        name: str,
        description: str,
        *,
        lock_id: str,
        grant: InventoryGrant | None = None,
    ) -> "ToolDescriptor":
        return cls(name=name, description=description, kind=ToolKind.attempt, lock_id=lock_id, grant=grant)

    @classmethod
    def reveal(cls, name: str, description: str, *, lock_id: str, text: str) -> "ToolDescriptor":
        return cls(name=name, description=description, kind=ToolKind.attempt, lock_id=lock_id, auto_answer=True, text=text)

    @classmethod
    def noise(cls, name: str, description: str, text: str) -> "ToolDescriptor":
        return cls(name=name, description=description, kind=ToolKind.noise, text=text)


def tool_not_found_message(name: str) -> str:
    return f'Error: Tool "{name}" not found.'


class ToolRegistry:
    """Name -> descriptor table with O(1) lookup.

    Registration order is preserved so the catalog shown to an agent is stable.
    """

    def __init__(self, *, locks: LockGraph, inventory: Inventory) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        self._locks = locks
        self._inventory = inventory

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def register(self, tool: ToolDescriptor) -> None:
        if tool.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {tool.name}")
        if tool.kind == ToolKind.attempt and (tool.lock_id is None or tool.lock_id not in self._locks):
            raise ValueError(f"Attempt tool '{tool.name}' targets unknown lock '{tool.lock_id}'")
        self._tools[tool.name] = tool

    def catalog(self) -> list[ToolInfo]:
        return [ToolInfo(name=t.name, description=t.description) for t in self._tools.values()]

    def dispatch(self, name: str, args: Sequence[str]) -> str:
        """Run a tool and return its result text verbatim.

        Every failure (unknown tool, gated lock, wrong answer) comes back as text.
        """

        tool = self._tools.get(name)
        if tool is None:
            logger.debug("Tool not found: %s", name)
            return tool_not_found_message(name)

        if tool.kind == ToolKind.query or tool.kind == ToolKind.noise:
            return tool.text
        if tool.kind == ToolKind.attempt:
            return self._run_attempt(tool, args)

        raise ValueError(f"Unknown tool kind: {tool.kind}")

    def _run_attempt(self, tool: ToolDescriptor, args: Sequence[str]) -> str:
        if tool.lock_id is None:
            raise ValueError(f"Attempt tool '{tool.name}' has no lock")

        if tool.auto_answer:
            res = self._locks.open(tool.lock_id)
            if res.outcome in (AttemptOutcome.accepted, AttemptOutcome.already_solved):
                return tool.text
            return res.message

        # A missing argument is just a wrong answer (unless the answer is empty).
        candidate = args[0] if args else ""
        res = self._locks.attempt(tool.lock_id, candidate)

        if res.accepted and tool.grant is not None and self._inventory.grant(tool.grant.item):
            logger.info("Inventory grant: %s", tool.grant.item)
            return f"{res.message}\n{tool.grant.message}"

        return res.message
