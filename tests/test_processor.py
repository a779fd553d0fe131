"""Tests for drawing annotations in the editor and the printer."""

import pygments
from prompt_toolkit.layout.controls import BufferControl
from prompt_toolkit.layout.processors import TransformationInput

from conftest import ORG_SAMPLE
from weights.editor.processor import WeightsProcessor, splice
from weights.editor.text import annotate, detect_lexer
from weights.text.dialect import get_dialect


def line_input(mode, lineno):
    document = mode.buffer.document
    return TransformationInput(
        buffer_control=BufferControl(buffer=mode.buffer),
        document=document,
        lineno=lineno,
        source_to_display=lambda i: i,
        fragments=[("", document.lines[lineno])],
        width=80,
        height=10,
    )


def plain(fragments):
    return "".join(fragment[1] for fragment in fragments)


class TestSplice:
    def test_inside_a_fragment(self):
        result = splice([("a", "abc"), ("b", "def")], 4, [("x", "!")])
        assert result == [("a", "abc"), ("b", "d"), ("x", "!"), ("b", "ef")]

    def test_at_a_fragment_boundary(self):
        result = splice([("a", "abc"), ("b", "def")], 3, [("x", "!")])
        assert result == [("a", "abc"), ("x", "!"), ("b", "def")]

    def test_past_the_end(self):
        assert splice([("a", "abc")], 3, [("x", "!")]) == [("a", "abc"), ("x", "!")]


class TestWeightsProcessor:
    def test_heading_line(self, make_mode):
        mode = make_mode(ORG_SAMPLE)
        mode.activate()
        transformation = WeightsProcessor(mode).apply_transformation(line_input(mode, 0))

        assert plain(transformation.fragments) == "* H1" + " " * 19 + "* 2 + 1"
        assert transformation.fragments[-1] == ("class:weights", "* 2 + 1")
        assert transformation.source_to_display(3) == 3
        assert transformation.source_to_display(4) == 30
        assert transformation.display_to_source(10) == 4
        assert transformation.display_to_source(31) == 5

    def test_body_line_is_untouched(self, make_mode):
        mode = make_mode(ORG_SAMPLE)
        mode.activate()
        ti = line_input(mode, 2)
        transformation = WeightsProcessor(mode).apply_transformation(ti)
        assert transformation.fragments == ti.fragments

    def test_inactive_mode(self, make_mode):
        mode = make_mode(ORG_SAMPLE)
        ti = line_input(mode, 0)
        transformation = WeightsProcessor(mode).apply_transformation(ti)
        assert transformation.fragments == ti.fragments


class TestAnnotate:
    def test_printed_lines(self, make_mode):
        mode = make_mode(ORG_SAMPLE)
        mode.activate()
        lexer = detect_lexer(get_dialect("org"))
        lines = annotate(mode, list(pygments.lex(ORG_SAMPLE, lexer=lexer)))

        assert plain(lines[0]) == "* H1" + " " * 19 + "* 2 + 1"
        assert plain(lines[1]) == "** H2" + " " * 21 + "** 2"
        assert plain(lines[2]) == "para one"
