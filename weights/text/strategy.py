# weights/text/strategy.py
"""
Counting strategies for the subtree and paragraph weights of a span.

A strategy runs on a document already narrowed to one heading's span and
returns `(subtrees, paragraphs)`. Dialects with a structural parser use a
tree strategy (see :mod:`weights.text.markdown`); others fall back to the
linear :class:`ScanStrategy` below.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from weights.text.headings import Headings
from weights.text.outline import OutlineText


class WeightStrategy(ABC):
    @abstractmethod
    def count(self, document: OutlineText, headings: Headings) -> Tuple[int, int]:
        """Return (subtrees, paragraphs) for the visible span of *document*."""


class ScanStrategy(WeightStrategy):
    """
    Linear approximation using only heading traversal and blank lines.

    Headings are counted by walking backward from the end of the span; the
    count includes the span's own heading, hence the `- 1`.

    Paragraphs are text blocks minus headings plus one. A block starts at any
    non-blank line that opens the span, follows a blank line, or is itself a
    heading. The correction assumes each heading shares a block with its
    first paragraph, so a heading with an empty body is still credited with
    one paragraph. Fixing this needs a real structural parse of the dialect.
    """

    def count(self, document: OutlineText, headings: Headings) -> Tuple[int, int]:
        found = 0
        heading = headings.back_to_heading(document.point_max)
        while heading is not None:
            found += 1
            heading = headings.previous_heading(heading)

        blocks = 0
        blank = True  # the span start opens a block
        for start, line in document.lines():
            if not line.strip():
                blank = True
                continue
            if blank or headings.level_at(start) is not None:
                blocks += 1
            blank = False

        subtrees = max(found - 1, 0)
        paragraphs = max(blocks - found + 1, 0)
        return subtrees, paragraphs
