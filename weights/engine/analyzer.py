# weights/engine/analyzer.py
"""
Subtree analysis: the weight of the span opened by a heading.
"""

from dataclasses import dataclass

from weights.text.headings import Headings
from weights.text.outline import OutlineText
from weights.text.strategy import WeightStrategy


@dataclass(frozen=True)
class Weight:
    subtrees: int  # descendant headings at any depth
    paragraphs: int  # paragraph-like blocks at any depth
    body_lines: int  # lines up to the next heading of any level


class SubtreeAnalyzer:
    def __init__(
        self,
        document: OutlineText,
        headings: Headings,
        strategy: WeightStrategy,
    ):
        self.document = document
        self.headings = headings
        self.strategy = strategy

    def analyze(self, heading: int) -> Weight:
        """
        Weigh the heading starting at *heading*.

        The caller guarantees *heading* is a heading line start. The view is
        narrowed to the span while counting and restored afterwards.
        """
        end = self.headings.subtree_end(heading)
        with self.document.narrow(heading, end):
            subtrees, paragraphs = self.strategy.count(self.document, self.headings)
        return Weight(subtrees, paragraphs, self.body_lines(heading))

    def body_lines(self, heading: int) -> int:
        """
        Lines between the heading line and the next heading of any level.

        Blank lines count. At the end of the document a final unterminated
        line counts and the empty remainder after a final newline does not.
        """
        doc = self.document
        body = doc.next_line(heading)
        if body is None:
            return 0
        end = self.headings.next_heading(heading)
        return doc.count_lines(body, end if end is not None else doc.point_max)
