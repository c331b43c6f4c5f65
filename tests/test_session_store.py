from __future__ import annotations

from uuid import uuid4

import pytest

from puzzle_room.session_store import SessionNotFoundError, SessionStore


def test_create_and_require() -> None:
    store = SessionStore()
    session = store.create_session(seed=5, noise_tool_count=3)

    assert store.require_session(session.session_id) is session
    assert session.seed == 5
    assert session.snapshot().tool_count == len(session.engine.registry)


def test_missing_session() -> None:
    store = SessionStore()
    assert store.get_session(uuid4()) is None
    with pytest.raises(SessionNotFoundError):
        store.require_session(uuid4())


def test_random_seed_is_recorded() -> None:
    session = SessionStore().create_session(noise_tool_count=5)
    assert session.seed > 0


def test_sessions_are_isolated() -> None:
    store = SessionStore()
    a = store.create_session(seed=1)
    b = store.create_session(seed=1)

    a.execute_tool("victorian_attempt_combination", ["3063"])

    assert a.engine.locks.is_solved("victorian")
    assert not b.engine.locks.is_solved("victorian")
    assert len(b.engine.transcript) == 1
    assert len(store.list_sessions()) == 2


def test_execute_tool_touches_session() -> None:
    session = SessionStore().create_session(seed=2, noise_tool_count=0)
    before = session.last_updated_at
    session.execute_tool("vault_inspect_door", [])
    assert session.last_updated_at >= before
    assert session.snapshot().transcript[-1] == "It requires a final calculation based on all previous challenges."


def test_discard_removes_session() -> None:
    store = SessionStore()
    kept = store.create_session(seed=3, noise_tool_count=0)
    gone = store.create_session(seed=4, noise_tool_count=0)

    assert store.discard(gone.session_id) is gone
    assert store.get_session(gone.session_id) is None
    assert store.list_sessions() == [kept]

    with pytest.raises(SessionNotFoundError):
        store.discard(gone.session_id)
