from typing import Iterator, List, Optional, Tuple

from models.session_models import CommandHistoryEntry


class HistoryLog:
    """
    Newest-first log of executed commands.

    Entries are only ever added at the front or dropped all at once. With a
    `limit`, the oldest entries are evicted once the log is full.
    """

    def __init__(self, limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError("History limit must be a positive number.")
        self._limit = limit
        self._entries: List[CommandHistoryEntry] = []

    def prepend(self, entry: CommandHistoryEntry) -> None:
        self._entries.insert(0, entry)
        if self._limit is not None:
            del self._entries[self._limit:]

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> Tuple[CommandHistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CommandHistoryEntry]:
        return iter(self.entries())
