# weights/engine/store.py
"""
Live annotations, at most one per heading line.

Each annotation is anchored by a marker at the start of its heading line, so
edits above it move it along. The splice column is resolved on every upsert;
the drawing code clamps it to the line length in between.
"""

import itertools
from dataclasses import dataclass
from logging import Logger
from typing import Dict, Iterator, Optional

from weights.config import config
from weights.engine.analyzer import Weight
from weights.engine.render import Display, Renderer
from weights.text.headings import Headings
from weights.text.outline import Change, Marker, OutlineText


@dataclass(eq=False)
class Annotation:
    marker: Marker
    column: int
    text: str
    filler: str
    level: int
    weight: Weight
    display: str
    stamp: int

    @property
    def position(self) -> int:
        return self.marker.position


class AnnotationStore:
    def __init__(self, document: OutlineText, headings: Headings, renderer: Renderer):
        self.document = document
        self.headings = headings
        self.renderer = renderer
        self._index: Dict[int, Annotation] = {}
        self._stamps = itertools.count(1)
        self.logger: Logger = config.get_logger("logger", self.__class__.__name__)

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(sorted(self._index.values(), key=lambda a: a.position))

    def at(self, pos: int) -> Optional[Annotation]:
        """The annotation on the line holding *pos*, if any."""
        return self._index.get(self.document.line_start(pos))

    def splice_column(self, start: int) -> int:
        """
        Column after which the annotation is drawn on the line at *start*.

        Within the line, back up over the word under the configured column
        and the whitespace before it; at the line end, over trailing blanks.
        """
        line = self.document.line_text(start)
        column = min(self.renderer.column, len(line))
        if column < len(line):
            while column > 0 and line[column - 1] not in " \t":
                column -= 1
        while column > 0 and line[column - 1] in " \t":
            column -= 1
        return column

    def upsert(
        self,
        heading: int,
        weight: Weight,
        level: int,
        display: str = Display.WEIGHTS,
    ) -> Annotation:
        start = self.document.line_start(heading)
        column = self.splice_column(start)
        text = self.renderer.render(
            level, weight.subtrees, weight.paragraphs, weight.body_lines, display
        )
        filler = self.renderer.filler(text, column, display)
        stamp = next(self._stamps)

        annotation = self._index.get(start)
        if annotation is None:
            annotation = Annotation(
                marker=self.document.marker(start),
                column=column,
                text=text,
                filler=filler,
                level=level,
                weight=weight,
                display=display,
                stamp=stamp,
            )
            self._index[start] = annotation
        else:
            annotation.column = column
            annotation.text = text
            annotation.filler = filler
            annotation.level = level
            annotation.weight = weight
            annotation.display = display
            annotation.stamp = stamp
        return annotation

    def remove(self, heading: int) -> bool:
        annotation = self._index.pop(self.document.line_start(heading), None)
        if annotation is None:
            return False
        self.document.release(annotation.marker)
        return True

    def clear(self) -> None:
        for annotation in self._index.values():
            self.document.release(annotation.marker)
        self._index.clear()

    def verify(self, change: Change) -> None:
        """
        Re-key annotations after *change* has moved their markers and drop
        the ones that no longer sit at the start of a heading line.

        Only anchors on lines touched by the change can have lost their
        heading; elsewhere just the offsets moved.
        """
        first = self.document.line_start(change.start)
        index: Dict[int, Annotation] = {}
        for annotation in self._index.values():
            marker = annotation.marker
            pos = marker.position
            stale = not marker.valid
            if not stale and first <= pos <= change.end:
                stale = (
                    self.document.line_start(pos) != pos
                    or not self.headings.is_heading_line(pos)
                    or pos in index
                )
            if stale:
                self.logger.debug(f"Dropping stale annotation at {pos}")
                self.document.release(marker)
                continue
            index[pos] = annotation
        self._index = index
