"""
Pytest configuration and fixtures for the weights tests.
"""

from typing import Callable, Optional

import pytest
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document

from weights.engine.mode import WeightsMode
from weights.engine.settings import WeightsSettings
from weights.text.dialect import get_dialect

ORG_SAMPLE = "* H1\n** H2\npara one\n\npara two\n* H3\npara three\n"

MARKDOWN_SAMPLE = "# H1\n## H2\npara one\n\npara two\n# H3\npara three\n"

ORG_TREE = """\
* A
alpha
** B
beta
*** C
gamma
** D
delta
* E
epsilon
"""

MARKDOWN_TREE = ORG_TREE.replace("*", "#")

SAMPLES = {"org": ORG_SAMPLE, "markdown": MARKDOWN_SAMPLE}
TREES = {"org": ORG_TREE, "markdown": MARKDOWN_TREE}


def make_buffer(text: str, cursor: Optional[int] = None) -> Buffer:
    return Buffer(document=Document(text, len(text) if cursor is None else cursor))


def replace_text(
    buffer: Buffer,
    start: int,
    end: int,
    replacement: str = "",
    cursor: Optional[int] = None,
) -> None:
    """Replace [start, end) and leave the cursor after the replacement."""
    text = buffer.text[:start] + replacement + buffer.text[end:]
    position = start + len(replacement) if cursor is None else cursor
    buffer.document = Document(text, position)


@pytest.fixture
def settings() -> WeightsSettings:
    return WeightsSettings(column=30)


@pytest.fixture
def make_mode(settings) -> Callable[..., WeightsMode]:
    """Build an inactive mode over a fresh buffer holding *text*."""

    def factory(text: str, dialect: str = "org", cursor: Optional[int] = None):
        return WeightsMode(make_buffer(text, cursor), get_dialect(dialect), settings)

    return factory
