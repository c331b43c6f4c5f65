from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field

from puzzle_room.engine.views import LockView
from puzzle_room.lock import LockTable

logger = logging.getLogger(__name__)


class TopologyError(ValueError):
    pass


class LockNode(BaseModel):
    id: str
    name: str

    # Opaque secret. Compared byte-for-byte: no trimming, no case folding.
    answer: str

    # Order matters: the first unsolved entry is the one reported as blocking.
    requires: list[str] = Field(default_factory=list)
    description: str = ""
    solved: bool = False


class AttemptOutcome(StrEnum):
    accepted = "accepted"
    wrong_answer = "wrong_answer"
    prerequisite_unmet = "prerequisite_unmet"
    already_solved = "already_solved"
    unknown_lock = "unknown_lock"


@dataclass(frozen=True, slots=True)
class AttemptResult:
    outcome: AttemptOutcome
    lock_id: str
    message: str

    # Set only for `prerequisite_unmet`.
    blocking_id: str | None = None
    blocking_name: str | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome == AttemptOutcome.accepted


def _check_acyclic(locks: dict[str, LockNode]) -> None:
    """Raise TopologyError on unknown prerequisites or a prerequisite cycle."""

    for lock in locks.values():
        for req in lock.requires:
            if req not in locks:
                raise TopologyError(f"Lock '{lock.id}' requires unknown lock '{req}'")

    visiting: set[str] = set()
    done: set[str] = set()

    def _visit(lock_id: str, path: list[str]) -> None:
        if lock_id in done:
            return
        if lock_id in visiting:
            cycle = " -> ".join([*path, lock_id])
            raise TopologyError(f"Prerequisite cycle: {cycle}")
        visiting.add(lock_id)
        for req in locks[lock_id].requires:
            _visit(req, [*path, lock_id])
        visiting.discard(lock_id)
        done.add(lock_id)

    for lock_id in locks:
        _visit(lock_id, [])


class LockGraph:
    """Gated locks over a prerequisite DAG.

    All mutation goes through `attempt`/`open`, each of which runs its
    check-then-set under a per-lock critical section. `solved` only ever moves
    from False to True, and it does so at most once per lock.
    """

    def __init__(self, locks: Iterable[LockNode]) -> None:
        self._locks: dict[str, LockNode] = {}
        for lock in locks:
            if lock.id in self._locks:
                raise TopologyError(f"Duplicate lock id: {lock.id}")
            # Own a private copy so callers can't flip flags behind our back.
            self._locks[lock.id] = lock.model_copy(deep=True)
        _check_acyclic(self._locks)
        self._guards = LockTable()

    def __contains__(self, lock_id: object) -> bool:
        return lock_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)

    def ids(self) -> list[str]:
        return list(self._locks)

    def name_of(self, lock_id: str) -> str:
        return self._locks[lock_id].name

    def is_solved(self, lock_id: str) -> bool:
        lock = self._locks.get(lock_id)
        return lock is not None and lock.solved

    def all_solved(self) -> bool:
        return all(lock.solved for lock in self._locks.values())

    def _first_unmet(self, lock: LockNode) -> LockNode | None:
        for req in lock.requires:
            dep = self._locks[req]
            if not dep.solved:
                return dep
        return None

    def is_unlocked(self, lock_id: str) -> bool:
        """True iff every prerequisite of `lock_id` is solved."""

        lock = self._locks.get(lock_id)
        if lock is None:
            return False
        return self._first_unmet(lock) is None

    def attempt(self, lock_id: str, candidate: str) -> AttemptResult:
        return self._resolve(lock_id, candidate, lambda lock: candidate == lock.answer)

    def open(self, lock_id: str) -> AttemptResult:
        """Attempt a lock with its own canonical answer.

        Used by tools that open a lock as a side effect of reading something
        (e.g. the library journal). Gating still applies.
        """

        return self._resolve(lock_id, "", lambda lock: True)

    def _resolve(self, lock_id: str, candidate: str, matches: Callable[[LockNode], bool]) -> AttemptResult:
        lock = self._locks.get(lock_id)
        if lock is None:
            return AttemptResult(outcome=AttemptOutcome.unknown_lock, lock_id=lock_id, message="Error: Unknown lock.")

        with self._guards.guard(lock_id):
            if lock.solved:
                return AttemptResult(
                    outcome=AttemptOutcome.already_solved,
                    lock_id=lock_id,
                    message=f"The {lock.name} is already solved.",
                )

            blocking = self._first_unmet(lock)
            if blocking is not None:
                return AttemptResult(
                    outcome=AttemptOutcome.prerequisite_unmet,
                    lock_id=lock_id,
                    message=f"Action failed: The {blocking.name} must be solved first.",
                    blocking_id=blocking.id,
                    blocking_name=blocking.name,
                )

            if not matches(lock):
                return AttemptResult(
                    outcome=AttemptOutcome.wrong_answer,
                    lock_id=lock_id,
                    message=f'FAILURE. The {lock.name} does not respond to "{candidate}".',
                )

            lock.solved = True

        logger.info("Lock solved: %s", lock_id)
        return AttemptResult(
            outcome=AttemptOutcome.accepted,
            lock_id=lock_id,
            message=f"SUCCESS! The {lock.name} unlocks with a satisfying click.",
        )

    def views(self) -> list[LockView]:
        return [
            LockView(id=lock.id, name=lock.name, solved=lock.solved, requires=list(lock.requires), description=lock.description)
            for lock in self._locks.values()
        ]
