from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from puzzle_room.engine.views import ToolInfo

RULES_PROMPT = "base_agent.txt"

# puzzle_room/core/context.py -> project root
PROMPTS_DIR = Path(__file__).resolve().parents[2] / "prompts"


class PromptLoadError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class BaseAgentContext:
    """Global instructions shared by every decision agent."""

    system_prompt: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RenderedContext:
    """Final, merged context passed into the LLM agent."""

    system_prompt: str

    def as_messages(self) -> list[dict[str, str]]:
        return [{"role": "system", "content": self.system_prompt}]


def load_room_rules(name: str = RULES_PROMPT) -> str:
    path = PROMPTS_DIR / name
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError as e:
        raise PromptLoadError(f"Prompt not found: {path}") from e


def base_agent_context(*, system_prefix: str = "") -> BaseAgentContext:
    """Room rules for the decision agent, optionally preceded by `system_prefix`."""

    parts = [p for p in (system_prefix.strip(), load_room_rules()) if p]
    return BaseAgentContext(system_prompt="\n\n".join(parts), metadata={"rules": RULES_PROMPT})


def render_tool_catalog(tools: Sequence[ToolInfo]) -> str:
    lines = ["AVAILABLE TOOLS:"]
    lines.extend(f"- {t.name}: {t.description}" for t in tools)
    return "\n".join(lines)


def compose_context(*, base: BaseAgentContext, tools: Sequence[ToolInfo]) -> RenderedContext:
    parts: list[str] = [base.system_prompt.strip()]
    if tools:
        parts.append(render_tool_catalog(tools))

    system_prompt = "\n\n".join([p for p in parts if p.strip()]).strip()
    return RenderedContext(system_prompt=system_prompt)


def agent_context(*, tools: Sequence[ToolInfo], base: BaseAgentContext | None = None) -> RenderedContext:
    """Room rules (or `base`) stacked with the live tool catalog."""

    return compose_context(base=base or base_agent_context(), tools=tools)
