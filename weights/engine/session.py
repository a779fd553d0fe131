# weights/engine/session.py
"""
Per-buffer state of an active weights mode.

A session is created on activation and discarded on deactivation. It owns
the document view, the annotation store and the suppressed heading; the
reconciler and the cursor tracker work through it.
"""

from logging import Logger
from typing import Optional

from prompt_toolkit.buffer import Buffer

from weights.config import config
from weights.engine.analyzer import SubtreeAnalyzer
from weights.engine.render import Display, Renderer
from weights.engine.settings import WeightsSettings
from weights.engine.store import Annotation, AnnotationStore
from weights.text.dialect import Dialect
from weights.text.outline import Change, Marker, OutlineText


class WeightsSession:
    def __init__(
        self,
        buffer: Buffer,
        dialect: Dialect,
        settings: WeightsSettings,
        display: str = Display.WEIGHTS,
    ):
        self.dialect = dialect
        self.display = display
        self.document = OutlineText(buffer)
        self.headings = dialect.headings(self.document)
        self.analyzer = SubtreeAnalyzer(self.document, self.headings, dialect.strategy())
        self.renderer = Renderer(settings, self.headings.marker)
        self.store = AnnotationStore(self.document, self.headings, self.renderer)
        self.suppressed: Optional[Marker] = None
        self.logger: Logger = config.get_logger("logger", self.__class__.__name__)

    def refresh(self, heading: int) -> Annotation:
        """Recompute the weight of *heading* and upsert its annotation."""
        weight = self.analyzer.analyze(heading)
        level = self.headings.level_at(heading)
        return self.store.upsert(heading, weight, level, self.display)

    def populate(self) -> int:
        """Annotate every heading from the top of the document."""
        count = 0
        for heading in self.headings.iter_headings():
            self.refresh(heading)
            count += 1
        return count

    def sync(self) -> Optional[Change]:
        """Catch up with the buffer text and drop annotations it invalidated."""
        change = self.document.sync()
        if change is not None:
            self.store.verify(change)
            if self.suppressed is not None and not self.suppressed.valid:
                self.release_suppressed()
        return change

    def suppress(self, heading: int) -> None:
        """Hide the annotation on *heading* while the cursor sits on it."""
        self.release_suppressed()
        self.store.remove(heading)
        self.suppressed = self.document.marker(self.document.line_start(heading))

    def suppress_cursor_line(self) -> bool:
        """Suppress the heading on the cursor line, if there is one."""
        bol = self.document.line_start(self.document.cursor)
        if self.headings.level_at(bol) is None:
            return False
        self.suppress(bol)
        return True

    def restore(self, heading: int) -> Annotation:
        """Show the annotation on *heading* again, recomputed."""
        if self.suppressed is not None and self.suppressed.position == heading:
            self.release_suppressed()
        return self.refresh(heading)

    def release_suppressed(self) -> None:
        if self.suppressed is not None:
            self.document.release(self.suppressed)
            self.suppressed = None

    def close(self) -> None:
        self.store.clear()
        self.release_suppressed()
        self.document.release_all()
