# weights/text/markdown.py
"""
Copyright (C) 2023 Austin Berrio

Structured weights for Markdown spans.

The span text is parsed with the tree-sitter Markdown block grammar and the
resulting tree is walked once. Every heading node is counted (the span's own
heading included, hence the `- 1`), as is every paragraph-like block at any
depth: a paragraph nested in a block quote counts as well as the quote.
"""

from typing import Set, Tuple

from tree_sitter import Tree

from weights.text.headings import Headings
from weights.text.outline import OutlineText
from weights.text.sitter import get_parser, walk
from weights.text.strategy import WeightStrategy

HEADING_TYPES: Set[str] = {
    "atx_heading",
    "setext_heading",
}

# Markdown counterparts of paragraphs, tables, quote/verse, source and
# example blocks.
PARAGRAPH_TYPES: Set[str] = {
    "paragraph",
    "pipe_table",
    "block_quote",
    "fenced_code_block",
    "indented_code_block",
}


def count_tree(tree: Tree) -> Tuple[int, int]:
    """Return (headings, paragraph-like blocks) found anywhere in *tree*."""
    headings = 0
    paragraphs = 0
    for node in walk(tree.root_node):
        if node.type in HEADING_TYPES:
            headings += 1
        elif node.type in PARAGRAPH_TYPES:
            # the text of a setext heading is parsed as a paragraph
            if node.parent is not None and node.parent.type in HEADING_TYPES:
                continue
            paragraphs += 1
    return headings, paragraphs


class TreeStrategy(WeightStrategy):
    def __init__(self, lang: str = "markdown"):
        # parsers are reused across spans; each parse starts from scratch
        self.parser = get_parser(lang)

    def count(self, document: OutlineText, headings: Headings) -> Tuple[int, int]:
        tree = self.parser.parse(document.visible_text().encode())
        found, paragraphs = count_tree(tree)
        return max(found - 1, 0), paragraphs
