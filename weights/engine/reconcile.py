# weights/engine/reconcile.py
"""
Recompute the annotations made stale by an edit.

An ancestor's weight depends on everything nested below it, so an edit
inside a heading's body invalidates that heading and its whole ancestor
chain, and nothing else. Headings are refreshed innermost first.
"""

from logging import Logger
from typing import List

from weights.config import config
from weights.engine.session import WeightsSession


class ChangeReconciler:
    def __init__(self, session: WeightsSession):
        self.session = session
        self.logger: Logger = config.get_logger("logger", self.__class__.__name__)

    def on_change(self, start: int, end: int) -> List[int]:
        """
        Refresh the headings covering [start, end] and their ancestors.

        The walk begins at the heading enclosing the last changed character
        and moves up through earlier headings until it has handled one whose
        line ends before *start*. An edit on a heading line may change its
        level, which moves the end of the previous heading's span, so the
        walk goes on past such a heading. The heading on the cursor line is
        skipped (its annotation is suppressed while it is being edited) but
        its ancestors are not.

        Returns the refreshed heading positions in refresh order.
        """
        session = self.session
        doc = session.document
        headings = session.headings
        bol = doc.line_start(doc.cursor)

        seen = set()
        refreshed: List[int] = []

        pos = end - 1 if end > start else end
        while True:
            heading = headings.back_to_heading(pos)
            if heading is None:
                break  # top of the document

            if heading not in seen:
                seen.add(heading)
                if heading != bol:
                    session.refresh(heading)
                    refreshed.append(heading)

            for ancestor in headings.ancestors(heading):
                if ancestor in seen:
                    break  # the rest of the chain is already fresh
                seen.add(ancestor)
                if ancestor != bol:
                    session.refresh(ancestor)
                    refreshed.append(ancestor)

            if doc.line_end(heading) < start or heading <= doc.point_min:
                break
            pos = heading - 1

        if refreshed:
            self.logger.debug(f"Refreshed headings at {refreshed}")
        return refreshed
