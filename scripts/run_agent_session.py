"""Drive one puzzle session with the default LLM agent and print the transcript.

Contract
- Inputs: OPENAI_MODEL / OPENAI_API_KEY / OPENAI_BASE_URL from env (or `.env`).
- Output: the full transcript on stdout, then the final lock states.

Usage:
    python scripts/run_agent_session.py --seed 7 --max-turns 40

With a fixed seed the decoy catalog is reproducible; the agent's moves are not.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from puzzle_room.agent_runner import run_agent_session
from puzzle_room.agents.ag2_backend import create_default_agent
from puzzle_room.engine.puzzle import DEFAULT_NOISE_TOOL_COUNT, PuzzleEngine


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("--seed", type=int, default=1, help="seed for decoy tool generation")
    p.add_argument("--max-turns", type=int, default=40)
    p.add_argument("--noise-tools", type=int, default=DEFAULT_NOISE_TOOL_COUNT, help="number of decoy draws")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def _main(args: argparse.Namespace) -> int:
    engine = PuzzleEngine.default(seed=args.seed, noise_tool_count=args.noise_tools)
    agent = create_default_agent(name="cli-solver")

    turns = await run_agent_session(engine=engine, agent=agent, max_turns=args.max_turns)

    print(engine.transcript.render())
    print()
    print(f"turns={len(turns)} phase={engine.phase.value} inventory={engine.inventory.items()}")
    for view in engine.lock_views():
        mark = "x" if view.solved else " "
        print(f"[{mark}] {view.id}: {view.name}")

    return 0 if engine.is_escaped else 1


def main() -> int:
    load_dotenv(override=False)
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
