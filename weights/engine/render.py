# weights/engine/render.py
"""
Formatting of heading annotations.

Two displays are supported:

* weights: `"** 3 + 2"` - the level marker, the paragraph count and, when the
  heading has descendants, the subtree count. Right-aligned at the column.
* cookies: `" [+12]"` - the number of body lines hidden under the heading
  when it is folded, framed by four configurable strings.
"""

from prompt_toolkit.formatted_text import StyleAndTextTuples

from weights.engine.settings import WeightsSettings


class Display:
    WEIGHTS = "weights"
    COOKIES = "cookies"


class Renderer:
    def __init__(self, settings: WeightsSettings, marker: str = "*"):
        self.settings = settings
        self.marker = marker

    @property
    def column(self) -> int:
        return self.settings.column

    def render(
        self,
        level: int,
        subtrees: int,
        paragraphs: int,
        body_lines: int,
        display: str = Display.WEIGHTS,
    ) -> str:
        if display == Display.COOKIES:
            left, left_signal, right_signal, right = self.settings.cookie
            return f" {left}{left_signal}{body_lines}{right_signal}{right}"

        text = f"{self.marker * level} {paragraphs}"
        if subtrees:
            text += f" + {subtrees}"
        return text

    def filler(self, text: str, column: int, display: str = Display.WEIGHTS) -> str:
        """Spaces placed between the splice column and *text*."""
        if display == Display.COOKIES:
            return ""
        return " " * max(self.column - column - len(text), 1)

    def fragments(self, filler: str, text: str) -> StyleAndTextTuples:
        return [("", filler), (self.settings.style, text)]
