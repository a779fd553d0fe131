"""Tests for heading recognition and outline navigation."""

import pytest

from conftest import ORG_SAMPLE, SAMPLES, make_buffer, replace_text
from weights.text.dialect import dialect_for_path, get_dialect
from weights.text.headings import MarkdownHeadings, OrgHeadings, fenced_blocks
from weights.text.outline import OutlineText


def headings_for(text: str, dialect: str):
    return get_dialect(dialect).headings(OutlineText(make_buffer(text)))


@pytest.mark.parametrize("dialect", ["org", "markdown"])
class TestNavigation:
    def positions(self, dialect):
        text = SAMPLES[dialect]
        marker = get_dialect(dialect).headings.marker
        return (
            text,
            0,
            text.index(f"{marker * 2} H2"),
            text.index(f"{marker} H3"),
        )

    def test_levels(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        headings = headings_for(text, dialect)
        assert headings.level_of(h1) == 1
        assert headings.level_of(h2 + 3) == 2
        assert headings.level_of(text.index("para one")) is None
        assert headings.is_heading_line(h3)

    def test_back_to_heading(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        headings = headings_for(text, dialect)
        assert headings.back_to_heading(text.index("para two")) == h2
        assert headings.back_to_heading(h2) == h2
        assert headings.back_to_heading(len(text)) == h3

    def test_next_and_previous(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        headings = headings_for(text, dialect)
        assert headings.next_heading(h1) == h2
        assert headings.next_heading(h1, max_level=1) == h3
        assert headings.next_heading(h3) is None
        assert headings.previous_heading(h3) == h2
        assert headings.previous_heading(h1) is None

    def test_ancestry(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        headings = headings_for(text, dialect)
        assert headings.up_heading(h2) == h1
        assert headings.up_heading(text.index("para two")) == h1
        assert headings.up_heading(h1) is None
        assert list(headings.ancestors(h2)) == [h1]
        assert list(headings.ancestors(h3)) == []

    def test_subtree_end(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        headings = headings_for(text, dialect)
        assert headings.subtree_end(h1) == h3
        assert headings.subtree_end(h2) == h3
        assert headings.subtree_end(h3) == len(text)

    def test_iter_headings(self, dialect):
        text, h1, h2, h3 = self.positions(dialect)
        assert list(headings_for(text, dialect).iter_headings()) == [h1, h2, h3]


class TestRecognition:
    @pytest.mark.parametrize(
        "line, level",
        [
            ("* Heading", 1),
            ("*** Deep", 3),
            ("*\tTabbed", 1),
            ("*bold* text", None),
            ("*", None),
            ("plain", None),
        ],
    )
    def test_org(self, line, level):
        headings = OrgHeadings(OutlineText(make_buffer(line)))
        assert headings.level_of(0) == level

    @pytest.mark.parametrize(
        "line, level",
        [
            ("# Title", 1),
            ("###### Six", 6),
            ("   ## Indented", 2),
            ("#", 1),
            ("#hashtag", None),
            ("####### Seven", None),
            ("    # Code", None),
        ],
    )
    def test_markdown(self, line, level):
        headings = MarkdownHeadings(OutlineText(make_buffer(line)))
        assert headings.level_of(0) == level

    def test_document_without_headings(self):
        headings = OrgHeadings(OutlineText(make_buffer("just text\nmore\n")))
        assert list(headings.iter_headings()) == []
        assert headings.back_to_heading(5) is None
        assert headings.up_heading(5) is None

    def test_lookups_stay_inside_narrowing(self):
        doc = OutlineText(make_buffer(ORG_SAMPLE))
        headings = OrgHeadings(doc)
        h2 = ORG_SAMPLE.index("** H2")
        with doc.narrow(h2, ORG_SAMPLE.index("* H3")):
            assert headings.up_heading(h2) is None
            assert headings.next_heading(h2) is None
            assert list(headings.iter_headings()) == [h2]


class TestDialects:
    def test_lookup_by_name(self):
        assert get_dialect("Markdown").headings is MarkdownHeadings
        assert get_dialect("org").headings is OrgHeadings

    def test_lookup_by_path(self):
        assert dialect_for_path("notes/todo.org").name == "org"
        assert dialect_for_path("README.md").name == "markdown"

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            get_dialect("rst")

    def test_unknown_suffix(self):
        with pytest.raises(ValueError):
            dialect_for_path("notes.txt")


FENCED = "# A\n\n```sh\n# install\npip install x\n```\n\npara\n"


class TestFencedCode:
    def test_comment_in_a_fence_is_not_a_heading(self):
        headings = MarkdownHeadings(OutlineText(make_buffer(FENCED)))
        assert headings.level_of(FENCED.index("# install")) is None
        assert list(headings.iter_headings()) == [0]
        assert headings.subtree_end(0) == len(FENCED)

    def test_heading_after_the_fence(self):
        text = FENCED + "# B\n"
        headings = MarkdownHeadings(OutlineText(make_buffer(text)))
        assert list(headings.iter_headings()) == [0, text.index("# B")]

    @pytest.mark.parametrize(
        "text, hidden",
        [
            ("~~~\n# x\n~~~\n", True),
            ("```\n# x\n", True),
            ("````\n```\n# x\n````\n", True),
            ("``` a`b\n# x\n", False),
            ("    ```\n# x\n", False),
        ],
    )
    def test_fence_forms(self, text, hidden):
        headings = MarkdownHeadings(OutlineText(make_buffer(text)))
        assert (headings.level_of(text.index("# x")) is None) == hidden

    def test_fences_follow_edits(self):
        buffer = make_buffer("# A\n# B\n")
        headings = MarkdownHeadings(OutlineText(buffer))
        assert headings.is_heading_line(4)

        replace_text(buffer, 4, 4, "```\n")
        assert not headings.is_heading_line(8)

    def test_fenced_blocks(self):
        assert fenced_blocks("a\n```\nx\n```\nb\n") == [(2, 11)]
        assert fenced_blocks("```\n# x\n") == [(0, 8)]
        assert fenced_blocks("no code\n") == []
