from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from puzzle_room.agents.base import Agent
from puzzle_room.agents.move_parser import MoveParseError, parse_agent_move
from puzzle_room.core.context import BaseAgentContext, agent_context, base_agent_context
from puzzle_room.engine.puzzle import PuzzleEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AgentTurn:
    raw_move: str
    tool_name: str
    args: list[str] = field(default_factory=list)
    result: str = ""


def build_move_prompt(transcript: Sequence[str]) -> str:
    history = "\n".join(transcript)
    return (
        f"Current Terminal History:\n\n{history}\n\n"
        'Your next move (output ONLY the tool call, e.g. "victorian_inspect_wheels"):'
    )


async def run_agent_turn(
    *,
    engine: PuzzleEngine,
    agent: Agent,
    base: BaseAgentContext | None = None,
) -> AgentTurn:
    """Ask the agent for one move and execute it through the engine.

    The engine does no validation beyond its own NotFound/gating checks, so an
    unparseable move is executed as a tool named by the raw text and lands in
    the transcript as a NotFound.
    """

    ctx = agent_context(tools=engine.tool_catalog(), base=base)
    action = await agent.propose_action(prompt=build_move_prompt(engine.transcript.lines()), ctx=ctx)

    raw = action.content
    try:
        move = parse_agent_move(raw)
        tool_name, args = move.tool_name, list(move.args)
    except MoveParseError:
        logger.info("Unparseable move from %s: %r", agent.name, raw)
        tool_name, args = raw.strip(), []

    result = engine.execute_tool(tool_name, args)
    return AgentTurn(raw_move=raw, tool_name=tool_name, args=args, result=result)


async def run_agent_session(
    *,
    engine: PuzzleEngine,
    agent: Agent,
    max_turns: int,
    base: BaseAgentContext | None = None,
) -> list[AgentTurn]:
    """Run turns until the vault opens or `max_turns` is reached."""

    base = base or base_agent_context()
    turns: list[AgentTurn] = []
    for _ in range(max_turns):
        if engine.is_escaped:
            break
        turns.append(await run_agent_turn(engine=engine, agent=agent, base=base))

    logger.info("Agent session ended after %d turns (phase=%s)", len(turns), engine.phase.value)
    return turns
