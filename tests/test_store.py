"""Tests for the annotation store."""

import pytest

from conftest import make_buffer, replace_text
from weights.engine.analyzer import Weight
from weights.engine.render import Renderer
from weights.engine.settings import WeightsSettings
from weights.engine.store import AnnotationStore
from weights.text.headings import OrgHeadings
from weights.text.outline import OutlineText


def make_store(text: str, column: int = 20):
    buffer = make_buffer(text)
    document = OutlineText(buffer)
    renderer = Renderer(WeightsSettings(column=column), "*")
    return buffer, document, AnnotationStore(document, OrgHeadings(document), renderer)


class TestSpliceColumn:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("* Short", 7),
            ("* Title   ", 7),
            ("* aaaa bbbb cccc dddd eeee", 16),
            ("* aaaaaaaaaaaaaaaaaaaaaaaaaaa", 1),
        ],
    )
    def test_column(self, line, expected):
        _, _, store = make_store(line)
        assert store.splice_column(0) == expected


class TestUpsert:
    def test_creates_annotation(self):
        _, _, store = make_store("* H1\n** H2\n")
        annotation = store.upsert(0, Weight(1, 2, 0), 1)

        assert annotation.text == "* 2 + 1"
        assert annotation.column == 4
        assert annotation.filler == " " * 9
        assert annotation.position == 0
        assert store.at(2) is annotation
        assert len(store) == 1

    def test_updates_in_place(self):
        _, _, store = make_store("* H1\n** H2\n")
        first = store.upsert(0, Weight(1, 2, 0), 1)
        stamp = first.stamp
        second = store.upsert(0, Weight(0, 5, 0), 1)

        assert second is first
        assert second.text == "* 5"
        assert second.stamp > stamp
        assert len(store) == 1

    def test_iterates_in_document_order(self):
        _, _, store = make_store("* H1\n** H2\n")
        store.upsert(5, Weight(0, 0, 0), 2)
        store.upsert(0, Weight(1, 0, 0), 1)
        assert [a.position for a in store] == [0, 5]

    def test_remove(self):
        _, _, store = make_store("* H1\n")
        store.upsert(0, Weight(0, 0, 0), 1)
        assert store.remove(0)
        assert not store.remove(0)
        assert store.at(0) is None


class TestVerify:
    def test_markers_follow_insertions_above(self):
        buffer, document, store = make_store("* A\n* B\n")
        store.upsert(0, Weight(0, 1, 0), 1)
        store.upsert(4, Weight(0, 1, 0), 1)

        replace_text(buffer, 0, 0, "x\n")
        store.verify(document.sync())

        assert [a.position for a in store] == [2, 6]
        assert store.at(6).text == "* 1"

    def test_deleted_heading_is_dropped(self):
        buffer, document, store = make_store("* A\n* B\n")
        store.upsert(0, Weight(0, 1, 0), 1)
        store.upsert(4, Weight(0, 1, 0), 1)

        replace_text(buffer, 4, 6)
        store.verify(document.sync())

        assert [a.position for a in store] == [0]

    def test_heading_joined_to_previous_line_is_dropped(self):
        buffer, document, store = make_store("* A\n* B\n")
        store.upsert(0, Weight(0, 1, 0), 1)
        store.upsert(4, Weight(0, 1, 0), 1)

        replace_text(buffer, 3, 4)
        store.verify(document.sync())

        assert [a.position for a in store] == [0]
        assert document.text == "* A* B\n"

    def test_clear(self):
        _, document, store = make_store("* A\n* B\n")
        store.upsert(0, Weight(0, 1, 0), 1)
        store.clear()
        assert len(store) == 0
        assert document._markers == []

    def test_heading_broken_after_its_line_start_is_dropped(self):
        buffer, document, store = make_store("* A\nbody\n* B\n")
        store.upsert(0, Weight(0, 1, 1), 1)
        store.upsert(9, Weight(0, 0, 0), 1)

        replace_text(buffer, 1, 2)
        store.verify(document.sync())

        assert document.text == "*A\nbody\n* B\n"
        assert [a.position for a in store] == [8]
