# weights/editor/processor.py
"""
Draw heading annotations inside a BufferControl.

The processor splices the annotation fragments into the displayed line at
the annotation's column. The buffer text is untouched; cursor positions are
mapped around the inserted fragments.
"""

from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.formatted_text.utils import fragment_list_len
from prompt_toolkit.layout.processors import (
    Processor,
    Transformation,
    TransformationInput,
)

from weights.engine.mode import WeightsMode


def splice(
    fragments: StyleAndTextTuples,
    index: int,
    inserted: StyleAndTextTuples,
) -> StyleAndTextTuples:
    """Return *fragments* with *inserted* placed before display index *index*."""
    result = list(fragments)
    offset = 0
    for i, (style, text, *handler) in enumerate(result):
        if offset + len(text) > index:
            # split the fragment holding the splice point
            head, tail = text[: index - offset], text[index - offset :]
            pieces = [(style, head, *handler)] if head else []
            pieces += inserted + [(style, tail, *handler)]
            result[i : i + 1] = pieces
            return result
        offset += len(text)
    return result + inserted


class WeightsProcessor(Processor):
    def __init__(self, mode: WeightsMode):
        self.mode = mode

    def apply_transformation(self, ti: TransformationInput) -> Transformation:
        session = self.mode.session
        if session is None:
            return Transformation(ti.fragments)

        start = ti.document.translate_row_col_to_index(ti.lineno, 0)
        annotation = session.store.at(start)
        if annotation is None or annotation.position != start:
            return Transformation(ti.fragments)

        line = ti.document.lines[ti.lineno]
        index = ti.source_to_display(min(annotation.column, len(line)))
        inserted = session.renderer.fragments(annotation.filler, annotation.text)
        width = fragment_list_len(inserted)

        def source_to_display(i: int) -> int:
            return i if i < index else i + width

        def display_to_source(i: int) -> int:
            if i < index:
                return i
            if i < index + width:
                return index
            return i - width

        return Transformation(
            splice(ti.fragments, index, inserted),
            source_to_display=source_to_display,
            display_to_source=display_to_source,
        )
