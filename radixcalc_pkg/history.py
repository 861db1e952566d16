"""In-memory calculation history for the REPL."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from . import config


class History:
    """Ordered ``(expression, result)`` pairs, oldest first.

    Recording can be switched off; entries added while it is off are dropped.
    Once ``limit`` entries are stored the oldest ones are discarded.
    """

    def __init__(self, limit: int | None = None):
        self.limit = limit if limit is not None else config.HISTORY_LIMIT
        self._data: deque[tuple[str, str]] = deque(maxlen=self.limit)
        self._recording = True

    @property
    def recording(self) -> bool:
        return self._recording

    def toggle_recording(self) -> bool:
        """Flip recording on or off and return the new state."""
        self._recording = not self._recording
        return self._recording

    def add(self, expression: str, result: str) -> None:
        if self._recording:
            self._data.append((expression, result))

    def clear(self) -> None:
        self._data.clear()

    def entries(self) -> list[tuple[str, str]]:
        return list(self._data)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
