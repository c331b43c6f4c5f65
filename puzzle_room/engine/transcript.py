from __future__ import annotations

from collections.abc import Iterator, Sequence

WELCOME_LINE = "Welcome to the Puzzle Room Challenge. You have 60 minutes."


def format_invocation(name: str, args: Sequence[str]) -> str:
    return f"> {name}({', '.join(args)})"


class TranscriptLog:
    """Append-only session history.

    Lines are never reordered or dropped; readers get copies.
    """

    def __init__(self, *, welcome: str = WELCOME_LINE) -> None:
        self._lines: list[str] = [welcome]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))

    def append(self, line: str) -> None:
        self._lines.append(line)

    def record_invocation(self, name: str, args: Sequence[str], result: str) -> None:
        self._lines.append(format_invocation(name, args))
        self._lines.append(result)

    def lines(self) -> list[str]:
        return list(self._lines)

    def render(self) -> str:
        return "\n".join(self._lines)
