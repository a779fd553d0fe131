"""
Print an outline with its heading weights.

https://python-prompt-toolkit.readthedocs.io/en/master/pages/printing_text.html
"""

import argparse
from dataclasses import replace
from typing import List

import pygments
from prompt_toolkit import print_formatted_text as print
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import (
    FormattedText,
    PygmentsTokens,
    StyleAndTextTuples,
    to_formatted_text,
)
from prompt_toolkit.formatted_text.utils import split_lines
from prompt_toolkit.styles import Style
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from weights.config import config
from weights.config.style import STYLE_DARK
from weights.editor.processor import splice
from weights.engine.mode import WeightsMode
from weights.engine.settings import WeightsSettings
from weights.text.dialect import Dialect, dialect_for_path, get_dialect


def detect_lexer(dialect: Dialect) -> Lexer:
    # keep leading/trailing newlines so token lines match buffer lines
    try:
        return get_lexer_by_name(dialect.lexer, stripnl=False, ensurenl=False)
    except ClassNotFound:
        pass

    # last resort: plain text
    return TextLexer(stripnl=False, ensurenl=False)


def annotate(mode: WeightsMode, tokens) -> List[StyleAndTextTuples]:
    """Split highlighted *tokens* into lines and splice in the annotations."""
    session = mode.session
    document = Document(mode.buffer.text)
    lines = list(split_lines(to_formatted_text(PygmentsTokens(tokens))))

    for lineno, fragments in enumerate(lines):
        if lineno >= document.line_count:
            break
        start = document.translate_row_col_to_index(lineno, 0)
        annotation = session.store.at(start)
        if annotation is None or annotation.position != start:
            continue
        column = min(annotation.column, len(document.lines[lineno]))
        inserted = session.renderer.fragments(annotation.filler, annotation.text)
        lines[lineno] = splice(fragments, column, inserted)
    return lines


def main():
    parser = argparse.ArgumentParser(description="Print an outline with heading weights.")
    parser.add_argument("path", help="Markdown or Org file")
    parser.add_argument("--dialect", help="Outline dialect (default: from suffix)")
    parser.add_argument("--column", type=int, help="Annotation column")
    parser.add_argument(
        "--cookies", action="store_true", help="Show hidden line counts"
    )
    parser.add_argument("--debug", action="store_true", help="Print weights only")
    args = parser.parse_args()

    with open(args.path) as file:
        source = file.read()

    dialect = get_dialect(args.dialect) if args.dialect else dialect_for_path(args.path)
    settings = WeightsSettings.from_config()
    if args.column is not None:
        settings = replace(settings, column=args.column)
    if args.cookies:
        settings = replace(settings, show_weights=False)

    mode = WeightsMode(Buffer(document=Document(source, 0)), dialect, settings)
    session = mode.activate()

    if args.debug:
        for annotation in session.store:
            weight = annotation.weight
            row = mode.buffer.document.translate_index_to_position(annotation.position)[0]
            print(
                f"{row + 1}: level={annotation.level} subtrees={weight.subtrees} "
                f"paragraphs={weight.paragraphs} body_lines={weight.body_lines}"
            )
        return

    tokens = list(pygments.lex(source, lexer=detect_lexer(dialect)))
    fragments: StyleAndTextTuples = []
    for lineno, line in enumerate(annotate(mode, tokens)):
        if lineno:
            fragments.append(("", "\n"))
        fragments.extend(line)

    style = Style.from_dict(config.get_value("style.content", STYLE_DARK))
    print(FormattedText(fragments), style=style)


if __name__ == "__main__":
    main()
