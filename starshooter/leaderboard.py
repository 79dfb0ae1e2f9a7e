"""High-score table kept in descending score order."""

from __future__ import annotations

import bisect
import os
from typing import Iterator, List, Tuple, Union

PathLike = Union[str, "os.PathLike[str]"]


class Leaderboard:
    """Scores with names, highest first; equal scores keep insertion order."""

    def __init__(self, capacity: int = 8) -> None:
        self.capacity = capacity
        self._entries: List[Tuple[int, str]] = []

    def _add(self, score: int, name: str) -> None:
        bisect.insort_right(self._entries, (score, name), key=lambda e: -e[0])

    def insert(self, score: int, name: str) -> None:
        """Add an entry, dropping the last one if the table grows too long."""
        self._add(score, name)
        if len(self._entries) > self.capacity:
            self._entries.pop()

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def load(self, path: PathLike) -> None:
        """Replace the entries with those read from a file of "score name" pairs.

        Reading stops at the first pair that does not parse. Raises OSError
        if the file cannot be opened, leaving the table unchanged.
        """
        with open(path, encoding="utf-8") as handle:
            tokens = handle.read().split()
        self._entries.clear()
        pairs = iter(tokens)
        for score_text in pairs:
            name = next(pairs, None)
            if name is None:
                break
            try:
                score = int(score_text)
            except ValueError:
                break
            self._add(score, name)

    def save(self, path: PathLike) -> None:
        """Write the entries as one "score name" line each."""
        with open(path, "w", encoding="utf-8") as handle:
            for score, name in self._entries:
                handle.write(f"{score} {name}\n")

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)