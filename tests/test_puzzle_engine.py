from __future__ import annotations

import pathlib
import random

import pytest

from puzzle_room.api import models
from puzzle_room.engine import views
from puzzle_room.engine.catalog import default_locks, default_tools
from puzzle_room.engine.puzzle import PuzzleEngine
from puzzle_room.engine.transcript import WELCOME_LINE, format_invocation
from puzzle_room.engine.views import SessionPhase

SOLUTION = [
    ("victorian_attempt_combination", ["3063"]),
    ("chinese_attempt_alignment", ["4411"]),
    ("medieval_shout_password", ["53"]),
    ("japanese_unlock_with_code", ["773"]),
    ("digital_enter_pin", ["42"]),
    ("library_read_journal", []),
    ("vault_turn_wheel", ["979"]),
]


def test_fresh_session_state(engine: PuzzleEngine) -> None:
    assert engine.transcript.lines() == [WELCOME_LINE]
    assert engine.inventory.items() == []
    assert engine.phase == SessionPhase.in_progress
    assert not any(v.solved for v in engine.lock_views())


@pytest.mark.parametrize(
    ("name", "args"),
    [
        ("victorian_inspect_wheels", []),  # query
        ("victorian_attempt_combination", ["1"]),  # wrong answer
        ("chinese_attempt_alignment", ["4411"]),  # prerequisite unmet
        ("no_such_tool", ["a", "b"]),  # not found
        ("victorian_kick_brass", []),  # name shape of a decoy, may or may not exist
    ],
)
def test_every_call_appends_exactly_two_lines(engine: PuzzleEngine, name: str, args: list[str]) -> None:
    before = engine.transcript.lines()

    result = engine.execute_tool(name, args)

    after = engine.transcript.lines()
    assert len(after) == len(before) + 2
    assert after[: len(before)] == before
    assert after[-2] == format_invocation(name, args)
    assert after[-1] == result


def test_invocation_echo_format(engine: PuzzleEngine) -> None:
    engine.execute_tool("victorian_attempt_combination", ["12", "34"])
    engine.execute_tool("vault_inspect_door", [])
    lines = engine.transcript.lines()
    assert lines[1] == "> victorian_attempt_combination(12, 34)"
    assert lines[3] == "> vault_inspect_door()"


def test_not_found_is_transcribed(engine: PuzzleEngine) -> None:
    out = engine.execute_tool("open_sesame", ["please"])
    assert out == 'Error: Tool "open_sesame" not found.'
    assert engine.transcript.lines()[-2:] == ["> open_sesame(please)", out]


def test_decoy_call_is_inert(engine: PuzzleEngine) -> None:
    decoy = engine.noise_tools[0]
    views_before = engine.lock_views()

    assert engine.execute_tool(decoy, ["3063"]) == "Nothing happens."
    assert engine.lock_views() == views_before
    assert engine.inventory.items() == []


def test_scenarios_in_sequence(engine: PuzzleEngine) -> None:
    out = engine.execute_tool("chinese_attempt_alignment", ["4411"])
    assert out == "Action failed: The Victorian Lock must be solved first."

    out = engine.execute_tool("victorian_attempt_combination", ["3063"])
    assert "SUCCESS" in out

    out = engine.execute_tool("chinese_attempt_alignment", ["0000"])
    assert "FAILURE" in out
    assert not engine.locks.is_solved("chinese")


def test_full_walkthrough_escapes(engine: PuzzleEngine) -> None:
    for name, args in SOLUTION[:-1]:
        out = engine.execute_tool(name, args)
        assert "Action failed" not in out
        assert engine.phase == SessionPhase.in_progress

    out = engine.execute_tool(*SOLUTION[-1])
    assert out.startswith("SUCCESS!")
    assert "Final Vault" in out
    assert engine.is_escaped
    assert engine.locks.all_solved()
    assert engine.inventory.items() == ["Bell"]
    assert len(engine.transcript) == 1 + 2 * len(SOLUTION)


def test_vault_gated_on_every_other_lock(engine: PuzzleEngine) -> None:
    for name, args in SOLUTION[:-2]:
        engine.execute_tool(name, args)

    out = engine.execute_tool("vault_turn_wheel", ["979"])
    assert out == "Action failed: The Manuscript Library must be solved first."
    assert not engine.is_escaped


def test_calls_after_escape_degrade_to_no_ops(engine: PuzzleEngine) -> None:
    for name, args in SOLUTION:
        engine.execute_tool(name, args)
    views = engine.lock_views()

    for name, args in SOLUTION:
        if name == "library_read_journal":
            continue
        out = engine.execute_tool(name, ["whatever"])
        assert "already solved" in out

    assert engine.lock_views() == views
    assert engine.inventory.items() == ["Bell"]
    assert engine.phase == SessionPhase.escaped


def test_fsm_transitions_once(engine: PuzzleEngine) -> None:
    assert engine.fsm.sync() is False
    for name, args in SOLUTION:
        engine.execute_tool(name, args)
    assert engine.fsm.current_state == engine.fsm.escaped
    assert engine.fsm.sync() is False


def test_transcript_readers_get_copies(engine: PuzzleEngine) -> None:
    lines = engine.transcript.lines()
    lines.append("tampered")
    assert engine.transcript.lines() == [WELCOME_LINE]
    assert "tampered" not in list(engine.transcript)


def test_unknown_terminal_lock_rejected() -> None:
    with pytest.raises(ValueError):
        PuzzleEngine(locks=default_locks(), tools=default_tools(), rng=random.Random(0), terminal_lock_id="moat")


def test_engine_does_not_depend_on_http_layer() -> None:
    assert models.LockView is views.LockView
    assert models.ToolInfo is views.ToolInfo
    assert models.SessionPhase is views.SessionPhase

    engine_dir = pathlib.Path(views.__file__).parent
    for path in engine_dir.glob("*.py"):
        source = path.read_text(encoding="utf-8")
        assert "puzzle_room.api" not in source, path.name
        assert "fastapi" not in source, path.name
