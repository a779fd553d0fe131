"""
weights.editor.__main__

A small full-screen outline editor that keeps heading weights up to date
while the document is edited.

Keys:
  f5   toggle the weights engine
  f6   switch between weights and hidden line counts
  c-s  save
  c-q  quit
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path

from prompt_toolkit import Application
from prompt_toolkit.application.current import get_app
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.enums import EditingMode
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.key_binding.vi_state import InputMode
from prompt_toolkit.layout import HSplit
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.layout.margins import ConditionalMargin, NumberedMargin
from prompt_toolkit.lexers import PygmentsLexer
from prompt_toolkit.styles import Style
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from weights.config import config
from weights.config.style import STYLE_DARK
from weights.editor.processor import WeightsProcessor
from weights.engine.mode import WeightsMode
from weights.text.dialect import Dialect, dialect_for_path, get_dialect

TAB_WIDTH = config.get_value("editor.tab-width", 4)

kb = KeyBindings()

# editor state: the weights mode, the file path and the last status message
state = {"mode": None, "path": None, "message": ""}

#
# Lexical Analysis
#


def detect_lexer(dialect: Dialect) -> PygmentsLexer:
    try:
        cls = get_lexer_by_name(dialect.lexer).__class__
    except ClassNotFound:
        cls = TextLexer  # no pygments lexer for this dialect

    # expects a class, not an instance
    return PygmentsLexer(cls)


#
# on quit / save
#


@kb.add("c-q")
def on_quit(event: KeyPressEvent):
    event.app.exit()


@kb.add("c-s")
def on_save(event: KeyPressEvent):
    path = state["path"]
    path.write_text(event.current_buffer.text)
    state["message"] = f"Wrote {path}"


#
# on toggle
#


@kb.add("f5")
def on_toggle(event: KeyPressEvent):
    state["message"] = state["mode"].toggle()


@kb.add("f6")
def on_toggle_display(event: KeyPressEvent):
    state["message"] = state["mode"].toggle_display()


#
# on tab
#


@kb.add("tab")
def on_tab(event: KeyPressEvent):
    event.current_buffer.insert_text(" " * TAB_WIDTH)


@kb.add("s-tab")
def on_shift_tab(event: KeyPressEvent):
    buf = event.current_buffer
    doc = buf.document

    line = doc.current_line
    indent = len(line) - len(line.lstrip(" "))
    remove = min(indent, TAB_WIDTH)

    if remove > 0:
        # move cursor to beginning of line
        buf.cursor_position -= doc.cursor_position_col
        buf.delete(count=remove)
        # restore cursor horizontally
        buf.cursor_position += max(doc.cursor_position_col - remove, 0)


def parse_args() -> Namespace:
    parser = ArgumentParser(description="Edit an outline with live heading weights.")
    parser.add_argument("path", help="Markdown or Org file")
    parser.add_argument(
        "--dialect",
        default=config.get_value("editor.dialect"),
        help="Outline dialect (default: guessed from the file suffix).",
    )
    return parser.parse_args()


def status_bar_fn():
    app = get_app()
    buffer = app.current_buffer

    row = buffer.document.cursor_position_row + 1
    col = buffer.document.cursor_position_col + 1

    input_mode = app.vi_state.input_mode
    if buffer.selection_state:
        mode = "VISUAL"
    elif input_mode == InputMode.INSERT:
        mode = "INSERT"
    elif input_mode == InputMode.NAVIGATION:
        mode = "NORMAL"
    elif input_mode == InputMode.REPLACE:
        mode = "REPLACE"
    else:
        mode = "OTHER"

    return [
        ("class:status", f"  {mode}  "),
        ("", " | "),
        ("class:status.position", f"Ln {row}, Col {col}  "),
        ("", " | "),
        ("class:status.message", state["message"]),
    ]


def main():
    args = parse_args()

    path = Path(args.path)
    dialect = get_dialect(args.dialect) if args.dialect else dialect_for_path(path)
    text = path.read_text() if path.is_file() else ""

    # Buffer
    buffer = Buffer(document=Document(text, 0))

    # Weights (hooked to key presses once the application exists)
    mode = WeightsMode(buffer, dialect)

    # Window
    window = Window(
        content=BufferControl(
            buffer=buffer,
            lexer=detect_lexer(dialect),
            input_processors=[WeightsProcessor(mode)],
        ),
        allow_scroll_beyond_bottom=True,
        left_margins=[
            ConditionalMargin(
                margin=NumberedMargin(
                    relative=Condition(lambda: False),
                    display_tildes=True,
                ),
                filter=Condition(lambda: True),
            )
        ],
    )

    # Layout
    status_bar = Window(FormattedTextControl(status_bar_fn), height=1)
    layout = Layout(container=HSplit([window, status_bar]))

    # Style
    style = Style.from_dict(config.get_value("style.content", STYLE_DARK))

    # Application
    app = Application(
        layout=layout,
        key_bindings=kb,
        style=style,
        full_screen=True,
        editing_mode=EditingMode.VI,
    )

    mode.key_processor = app.key_processor
    state["mode"] = mode
    state["path"] = path
    state["message"] = mode.toggle()

    app.run()


if __name__ == "__main__":
    main()
