from __future__ import annotations

import logging

from statemachine import State, StateMachine

from puzzle_room.engine.locks import LockGraph
from puzzle_room.engine.views import SessionPhase

logger = logging.getLogger(__name__)


class SessionFSM(StateMachine):
    """Global puzzle phase derived from the lock graph.

    in_progress -> escaped, fired once when the terminal lock is solved.
    The FSM never blocks tool calls; it only reports where the session is.
    """

    in_progress = State(SessionPhase.in_progress.value, value=SessionPhase.in_progress.value, initial=True)
    escaped = State(SessionPhase.escaped.value, value=SessionPhase.escaped.value, final=True)

    vault_opened = in_progress.to(escaped)

    def __init__(self, locks: LockGraph, *, terminal_lock_id: str):
        self.locks = locks
        self.terminal_lock_id = terminal_lock_id
        super().__init__()

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase(str(self.current_state.value))

    def sync(self) -> bool:
        """Advance to `escaped` if the terminal lock is now solved.

        Returns True only on the call that performs the transition.
        """

        if self.current_state == self.in_progress and self.locks.is_solved(self.terminal_lock_id):
            self.vault_opened()
            return True
        return False

    def on_enter_escaped(self) -> None:
        logger.info("Terminal lock '%s' solved; session escaped", self.terminal_lock_id)
