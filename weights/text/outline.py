# weights/text/outline.py
"""
Read-only view over a prompt_toolkit buffer holding an outline document.

The view provides line arithmetic, markers that follow edits made elsewhere
in the buffer, and a narrowing scope that restricts every line helper to a
sub-range of the text. The buffer text is never written from here.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from prompt_toolkit.buffer import Buffer


@dataclass(frozen=True)
class Change:
    start: int  # first changed offset
    old_end: int  # end of the replaced text, old coordinates
    end: int  # end of the inserted text, new coordinates

    @property
    def delta(self) -> int:
        return self.end - self.old_end


class Marker:
    """A buffer offset that moves with insertions and deletions before it."""

    __slots__ = ("position", "valid")

    def __init__(self, position: int):
        self.position = position
        self.valid = True

    def __repr__(self) -> str:
        state = "" if self.valid else ", detached"
        return f"Marker({self.position}{state})"


def diff_text(old: str, new: str) -> Optional[Change]:
    """Return the smallest single replacement turning *old* into *new*."""
    if old == new:
        return None

    limit = min(len(old), len(new))
    start = 0
    while start < limit and old[start] == new[start]:
        start += 1

    tail = 0
    while tail < limit - start and old[-1 - tail] == new[-1 - tail]:
        tail += 1

    return Change(start=start, old_end=len(old) - tail, end=len(new) - tail)


class OutlineText:
    def __init__(self, buffer: Buffer):
        self.buffer = buffer
        self._snapshot: str = buffer.text
        self._markers: List[Marker] = []
        self._bounds: Optional[Tuple[int, int]] = None

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor_position

    @property
    def point_min(self) -> int:
        return self._bounds[0] if self._bounds else 0

    @property
    def point_max(self) -> int:
        return self._bounds[1] if self._bounds else len(self.text)

    #
    # narrowing
    #

    @contextmanager
    def narrow(self, start: int, end: int) -> Iterator["OutlineText"]:
        """Restrict the view to [start, end) and restore the previous view on exit."""
        previous = self._bounds
        self._bounds = (max(start, 0), min(end, len(self.text)))
        try:
            yield self
        finally:
            self._bounds = previous

    def visible_text(self) -> str:
        return self.text[self.point_min : self.point_max]

    #
    # line arithmetic
    #

    def line_start(self, pos: int) -> int:
        lo = self.point_min
        i = self.text.rfind("\n", lo, max(pos, lo))
        return i + 1 if i >= 0 else lo

    def line_end(self, pos: int) -> int:
        hi = self.point_max
        i = self.text.find("\n", pos, hi)
        return i if i >= 0 else hi

    def line_text(self, pos: int) -> str:
        return self.text[self.line_start(pos) : self.line_end(pos)]

    def column(self, pos: int) -> int:
        return pos - self.line_start(pos)

    def next_line(self, pos: int) -> Optional[int]:
        """Start of the line after the one holding *pos*, or None at the end."""
        end = self.line_end(pos)
        if end >= self.point_max:
            return None
        return end + 1

    def previous_line(self, pos: int) -> Optional[int]:
        """Start of the line before the one holding *pos*, or None at the top."""
        start = self.line_start(pos)
        if start <= self.point_min:
            return None
        return self.line_start(start - 1)

    def lines(self, pos: Optional[int] = None) -> Iterator[Tuple[int, str]]:
        """Yield (line start, line text) from the line holding *pos* downward."""
        start: Optional[int] = self.line_start(self.point_min if pos is None else pos)
        while start is not None:
            end = self.line_end(start)
            yield start, self.text[start:end]
            start = end + 1 if end < self.point_max else None

    def count_lines(self, start: int, end: int) -> int:
        """Number of lines in [start, end); a trailing newline opens no new line."""
        region = self.text[start:end]
        if not region:
            return 0
        return region.count("\n") + (0 if region.endswith("\n") else 1)

    #
    # markers
    #

    def marker(self, pos: int) -> Marker:
        marker = Marker(pos)
        self._markers.append(marker)
        return marker

    def release(self, marker: Marker) -> None:
        if marker in self._markers:
            self._markers.remove(marker)

    def release_all(self) -> None:
        self._markers.clear()

    def sync(self) -> Optional[Change]:
        """
        Compare the buffer with the last seen text, move markers and return
        the change (None if the text is unchanged).

        Markers on deleted characters are detached and collapse to the
        deletion start; markers at or after the replaced text shift.
        """
        change = diff_text(self._snapshot, self.buffer.text)
        self._snapshot = self.buffer.text
        if change is None:
            return None

        for marker in self._markers:
            if change.start <= marker.position < change.old_end:
                marker.position = change.start
                marker.valid = False
            elif marker.position >= change.old_end:
                marker.position += change.delta

        return change
