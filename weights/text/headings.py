# weights/text/headings.py
"""
Heading recognition for outline dialects.

A :class:`Headings` instance answers structural questions about heading
lines in an :class:`~weights.text.outline.OutlineText`, always within the
current narrowing. Positions are line starts. A lookup that runs off the
visible range returns None rather than raising.
"""

import re
from bisect import bisect_right
from typing import Iterator, List, Optional, Pattern, Tuple

from weights.text.outline import OutlineText


class Headings:
    #: Pattern matched at a line start; group 1 holds the level marker run.
    pattern: Pattern[str]
    #: Character repeated to show a heading level, e.g. "*" or "#".
    marker: str

    def __init__(self, document: OutlineText):
        self.document = document

    def level_at(self, start: int) -> Optional[int]:
        """Level of the heading starting at line start *start*, or None."""
        doc = self.document
        match = self.pattern.match(doc.text, start, doc.line_end(start))
        return len(match.group(1)) if match else None

    def level_of(self, pos: int) -> Optional[int]:
        return self.level_at(self.document.line_start(pos))

    def is_heading_line(self, pos: int) -> bool:
        return self.level_of(pos) is not None

    def back_to_heading(self, pos: int) -> Optional[int]:
        """The heading on or above the line holding *pos*."""
        start: Optional[int] = self.document.line_start(pos)
        while start is not None:
            if self.level_at(start) is not None:
                return start
            start = self.document.previous_line(start)
        return None

    def previous_heading(self, pos: int) -> Optional[int]:
        """The nearest heading strictly above the line holding *pos*."""
        start = self.document.previous_line(pos)
        return self.back_to_heading(start) if start is not None else None

    def next_heading(self, pos: int, max_level: Optional[int] = None) -> Optional[int]:
        """
        The nearest heading strictly below the line holding *pos*; with
        *max_level*, only headings at that level or shallower qualify.
        """
        start = self.document.next_line(pos)
        while start is not None:
            level = self.level_at(start)
            if level is not None and (max_level is None or level <= max_level):
                return start
            start = self.document.next_line(start)
        return None

    def up_heading(self, pos: int) -> Optional[int]:
        """The parent of the heading holding *pos*."""
        heading = self.back_to_heading(pos)
        if heading is None:
            return None
        level = self.level_at(heading)
        while True:
            heading = self.previous_heading(heading)
            if heading is None:
                return None
            if self.level_at(heading) < level:
                return heading

    def ancestors(self, pos: int) -> Iterator[int]:
        """Yield the ancestors of the heading holding *pos*, innermost first."""
        heading = self.up_heading(pos)
        while heading is not None:
            yield heading
            heading = self.up_heading(heading)

    def subtree_end(self, pos: int) -> int:
        """End of the span opened by the heading at *pos*."""
        level = self.level_of(pos)
        end = self.next_heading(pos, max_level=level)
        return end if end is not None else self.document.point_max

    def iter_headings(self) -> Iterator[int]:
        """Yield every visible heading from the top of the view."""
        doc = self.document
        heading: Optional[int] = doc.point_min
        if self.level_at(heading) is None:
            heading = self.next_heading(heading)
        while heading is not None:
            yield heading
            heading = self.next_heading(heading)


FENCE_PATTERN = re.compile(r" {0,3}(`{3,}|~{3,})(.*)")


def fenced_blocks(text: str) -> List[Tuple[int, int]]:
    """
    Return the (start, end) offsets of every fenced code block in *text*,
    fence lines included. An unclosed fence runs to the end of the text.
    """
    blocks: List[Tuple[int, int]] = []
    fence: Optional[str] = None  # the opening fence run while inside a block
    start = pos = 0
    for line in text.split("\n"):
        match = FENCE_PATTERN.match(line)
        if fence is None:
            # a backtick fence may not carry backticks in its info string
            if match and not (match.group(1)[0] == "`" and "`" in match.group(2)):
                fence = match.group(1)
                start = pos
        elif (
            match
            and match.group(1)[0] == fence[0]
            and len(match.group(1)) >= len(fence)
            and not match.group(2).strip()
        ):
            blocks.append((start, pos + len(line)))
            fence = None
        pos += len(line) + 1
    if fence is not None:
        blocks.append((start, len(text)))
    return blocks


class MarkdownHeadings(Headings):
    """
    ATX headings outside fenced code. Setext underlines are not recognised
    by a line scan.
    """

    pattern = re.compile(r" {0,3}(#{1,6})(?:[ \t]|$)")
    marker = "#"

    def __init__(self, document: OutlineText):
        super().__init__(document)
        self._source: Optional[str] = None
        self._blocks: List[Tuple[int, int]] = []
        self._starts: List[int] = []

    def level_at(self, start: int) -> Optional[int]:
        level = super().level_at(start)
        if level is None or not self.in_fence(start):
            return level
        return None

    def in_fence(self, pos: int) -> bool:
        """True if *pos* lies inside a fenced code block."""
        text = self.document.text
        if text is not self._source:
            # fences are found over the whole text, whatever the narrowing
            self._source = text
            self._blocks = fenced_blocks(text)
            self._starts = [start for start, _ in self._blocks]
        i = bisect_right(self._starts, pos) - 1
        return i >= 0 and pos <= self._blocks[i][1]


class OrgHeadings(Headings):
    pattern = re.compile(r"(\*+)[ \t]")
    marker = "*"
