from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

from autogen import ConversableAgent

from puzzle_room.agents.autogen_config import llm_config_from_env
from puzzle_room.agents.base import Agent, AgentAction, AgentBackendError
from puzzle_room.core.context import RenderedContext

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


def _extract_last_content(messages: object) -> str:
    """Extract the last message content from AG2 chat history."""

    if not isinstance(messages, list):
        return ""

    for msg in reversed(messages):
        if isinstance(msg, dict):
            content = msg.get("content")
            if isinstance(content, str) and content.strip():
                return content.strip()
    return ""


@dataclass(slots=True)
class Ag2ChatAgent:
    """Single-turn AG2 agent that proposes the next tool call.

    Context stacking (rules + tool catalog) is done by our code; transport and
    model config are AG2's job.

    Environment variables supported:
    - OPENAI_MODEL
    - OPENAI_API_KEY (optional if OPENAI_BASE_URL is set)
    - OPENAI_BASE_URL (for OpenAI-compatible servers like Ollama, e.g. http://127.0.0.1:11434/v1)
    """

    name: str
    model: str

    def _run_chat(self, prompt: str, system_prompt: str) -> str:
        llm_config = llm_config_from_env(default_model=self.model)
        agent = ConversableAgent(
            name=self.name,
            system_message=system_prompt,
            llm_config=llm_config,
            human_input_mode="NEVER",
        )

        result = agent.run(message=prompt, max_turns=1)
        result.process()

        text = _extract_last_content(list(result.messages))
        if not text and isinstance(result.summary, str):
            text = result.summary.strip()
        return text

    async def propose_action(self, *, prompt: str, ctx: RenderedContext) -> AgentAction:
        # AG2's run/process block on HTTP; keep them off the event loop.
        try:
            text = await asyncio.to_thread(self._run_chat, prompt, ctx.system_prompt)
        except Exception as e:
            logger.warning("Agent backend failed for %s: %s", self.name, e)
            raise AgentBackendError(f"Agent backend failed: {e}") from e

        return AgentAction(kind="move", content=text, metadata={"model": self.model})


def create_default_agent(*, name: str = "puzzle-solver") -> Agent:
    """LLM-backed decision agent for the model named by OPENAI_MODEL."""

    return Ag2ChatAgent(name=name, model=os.environ.get("OPENAI_MODEL", DEFAULT_MODEL))
