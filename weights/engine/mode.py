# weights/engine/mode.py
"""
Module: weights.engine.mode

Switch the weights engine on and off for one buffer.

Activation builds a fresh session, annotates every heading and then
subscribes to the buffer's text changes and, when a key processor is given,
to the before/after key press events (in which case a heading under the
cursor starts out hidden). Deactivation unsubscribes and tears the
session down, so activating again always rebuilds from scratch.
"""

from logging import Logger
from typing import Optional

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.key_binding.key_processor import KeyProcessor

from weights.config import config
from weights.engine.reconcile import ChangeReconciler
from weights.engine.render import Display
from weights.engine.session import WeightsSession
from weights.engine.settings import WeightsSettings
from weights.engine.tracker import CursorTracker
from weights.text.dialect import Dialect


class WeightsMode:
    def __init__(
        self,
        buffer: Buffer,
        dialect: Dialect,
        settings: Optional[WeightsSettings] = None,
        key_processor: Optional[KeyProcessor] = None,
    ):
        self.buffer = buffer
        self.dialect = dialect
        self.settings = settings if settings else WeightsSettings.from_config()
        self.key_processor = key_processor
        self.display = Display.WEIGHTS if self.settings.show_weights else Display.COOKIES

        self.session: Optional[WeightsSession] = None
        self.reconciler: Optional[ChangeReconciler] = None
        self.tracker: Optional[CursorTracker] = None
        self.logger: Logger = config.get_logger("logger", self.__class__.__name__)

    @property
    def active(self) -> bool:
        return self.session is not None

    def activate(self) -> WeightsSession:
        if self.session is not None:
            self.deactivate()

        session = WeightsSession(self.buffer, self.dialect, self.settings, self.display)
        count = session.populate()

        self.session = session
        self.reconciler = ChangeReconciler(session)
        self.tracker = CursorTracker(session)

        self.buffer.on_text_changed += self._on_text_changed
        if self.key_processor is not None:
            self.key_processor.before_key_press += self.tracker.before_command
            self.key_processor.after_key_press += self.tracker.after_command
            # the cursor may already sit on a heading line
            session.suppress_cursor_line()

        self.logger.info(f"Activated {self.dialect.name} weights: {count} headings")
        return session

    def deactivate(self) -> None:
        if self.session is None:
            return

        self.buffer.on_text_changed -= self._on_text_changed
        if self.key_processor is not None:
            self.key_processor.before_key_press -= self.tracker.before_command
            self.key_processor.after_key_press -= self.tracker.after_command

        self.session.close()
        self.session = None
        self.reconciler = None
        self.tracker = None
        self.logger.info("Deactivated weights")

    def toggle(self) -> str:
        if self.active:
            self.deactivate()
            return "Weights mode disabled"
        self.activate()
        return "Weights mode enabled"

    def toggle_display(self) -> str:
        if self.display == Display.WEIGHTS:
            self.display = Display.COOKIES
            message = "Displaying hidden line counts"
        else:
            self.display = Display.WEIGHTS
            message = "Displaying weights"
        if self.active:
            self.deactivate()
            self.activate()
        return message

    def _on_text_changed(self, buffer: Buffer) -> None:
        change = self.session.sync()
        if change is not None:
            self.reconciler.on_change(change.start, change.end)
