# weights/text/dialect.py
"""
Outline dialects: which lines are headings and how spans are weighed.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Type, Union

from weights.text.headings import Headings, MarkdownHeadings, OrgHeadings
from weights.text.markdown import TreeStrategy
from weights.text.strategy import ScanStrategy, WeightStrategy


@dataclass(frozen=True)
class Dialect:
    name: str
    headings: Type[Headings]
    strategy: Callable[[], WeightStrategy]
    lexer: str  # pygments lexer alias


_DIALECTS = MappingProxyType(
    {
        "markdown": Dialect("markdown", MarkdownHeadings, TreeStrategy, "markdown"),
        "org": Dialect("org", OrgHeadings, ScanStrategy, "org"),
    }
)

_EXT_TO_DIALECT: dict[str, str] = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".org": "org",
    ".outline": "org",
}


def get_dialect(name: str) -> Dialect:
    try:
        return _DIALECTS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown dialect '{name}'. Supported dialects are: {', '.join(_DIALECTS)}"
        ) from None


def dialect_for_path(path: Union[str, Path]) -> Dialect:
    suffix = Path(path).suffix.lower()
    name = _EXT_TO_DIALECT.get(suffix)
    if not name:
        raise ValueError(
            f"Unsupported file extension '{suffix}'. "
            f"Supported extensions are: {sorted(_EXT_TO_DIALECT)}"
        )
    return _DIALECTS[name]
