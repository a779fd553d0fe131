# weights/engine/tracker.py
"""
Hide the annotation of the heading line under the cursor.

`before_command` and `after_command` run around every key press. A heading
line shows its annotation except while the cursor is on that line, so the
heading text can be edited without a decoration trailing it.
"""

from typing import Any, Optional

from weights.engine.session import WeightsSession
from weights.text.outline import Marker


class CursorTracker:
    def __init__(self, session: WeightsSession):
        self.session = session
        self.anchor: Optional[Marker] = None

    def before_command(self, sender: Any = None) -> None:
        session = self.session
        doc = session.document
        self._forget()
        bol = doc.line_start(doc.cursor)
        if session.headings.level_at(bol) is not None:
            self.anchor = doc.marker(bol)

    def after_command(self, sender: Any = None) -> None:
        session = self.session
        doc = session.document
        headings = session.headings
        anchor = self.anchor

        bol = doc.line_start(doc.cursor)
        if anchor is not None and anchor.valid and anchor.position == bol:
            # still on the same heading line; keep it hidden
            if session.store.at(bol) is not None:
                session.suppress(bol)
            return

        if headings.level_at(bol) is not None:
            session.suppress(bol)

        if anchor is not None and anchor.valid:
            pos = anchor.position
            if doc.line_start(pos) == pos and headings.level_at(pos) is not None:
                session.restore(pos)

        self._forget()

    def _forget(self) -> None:
        if self.anchor is not None:
            self.session.document.release(self.anchor)
            self.anchor = None
