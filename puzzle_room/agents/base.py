from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from puzzle_room.core.context import RenderedContext


class AgentBackendError(RuntimeError):
    """The LLM backend failed to produce a move (transport, config, or auth)."""


@dataclass(frozen=True, slots=True)
class AgentAction:
    kind: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


class Agent(Protocol):
    """Anything that can propose the next move as free text.

    Scripted test agents, humans behind a form, and LLM-backed agents all fit.
    """

    name: str

    async def propose_action(self, *, prompt: str, ctx: RenderedContext) -> AgentAction:  # pragma: no cover
        ...
