from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field


class MoveParseError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class AgentMove:
    tool_name: str
    args: list[str] = field(default_factory=list)


_FENCE_RE = re.compile(r"^```[\w-]*$")
_CALL_RE = re.compile(r"^(?P<name>[A-Za-z_][\w]*)\s*\((?P<args>.*)\)\s*;?$")


def _split_call_args(inner: str) -> list[str]:
    # Commas inside a quoted argument belong to the argument.
    quote = next((c for c in inner if c in "\"'"), "\"")
    (row,) = csv.reader([inner], quotechar=quote, skipinitialspace=True)
    args = [a.strip().strip("\"'") for a in row]
    return [a for a in args if a]


def _first_move_line(text: str) -> str:
    for raw in text.splitlines():
        line = raw.strip()
        if not line or _FENCE_RE.match(line):
            continue
        # Agents often echo the terminal prompt marker or wrap the call in backticks.
        line = line.removeprefix(">").strip().strip("`").strip()
        if line:
            return line
    return ""


def parse_agent_move(text: str) -> AgentMove:
    """Turn free-text agent output into a tool call.

    Accepts either shell style (`name arg1 arg2`) or call style
    (`name(arg1, arg2)`). Only the first meaningful line is used; anything the
    model writes after it is ignored. Arguments are passed through verbatim
    apart from surrounding quotes, since answers are compared exactly.
    """

    line = _first_move_line(text)
    if not line:
        raise MoveParseError("Agent produced no move")

    m = _CALL_RE.match(line)
    if m is not None:
        inner = m.group("args").strip()
        args = _split_call_args(inner) if inner else []
        return AgentMove(tool_name=m.group("name"), args=args)

    name, *args = line.split()
    return AgentMove(tool_name=name, args=[a.strip("\"'") for a in args])
