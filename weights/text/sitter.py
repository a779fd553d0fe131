# weights/text/sitter.py
"""
Copyright (C) 2023 Austin Berrio

Utilities for loading Tree-Sitter grammars and walking the trees they build.

Public helpers
--------------
* :func:`get_language` - Return a :class:`tree_sitter.Language` for a grammar name.
* :func:`get_parser`   - Return a fresh :class:`tree_sitter.Parser` for a grammar.
* :func:`get_tree`     - Convenience: parse a source string and return a :class:`tree_sitter.Tree`.
* :func:`walk`         - Pre-order traversal over every node below a root.

The immutable `Language` capsules are cached via :func:`functools.lru_cache`.
"""

import importlib
import importlib.metadata
from functools import lru_cache
from typing import Any, Iterator, Union

# `tree_sitter` grammars expose a `language()` function returning a PyCapsule.
# In CPython 3.13+ that type is `types.CapsuleType`; older versions use `Any`.
try:
    from types import CapsuleType  # type: ignore[attr-defined]  # 3.13+
except ImportError:  # pragma: no cover
    CapsuleType = Any  # type: ignore[assignment]

from tree_sitter import Language, Node, Parser, Tree

_MODULE_NAMES: list[str] = []
for _d in importlib.metadata.distributions():
    _name = (_d.name or "").lower().replace("_", "-")
    if _name.startswith("tree-sitter-"):
        # tree-sitter-{lang} -> tree_sitter_{lang}
        _MODULE_NAMES.append(_name.replace("-", "_"))


@lru_cache(maxsize=None)
def _capsule_from_name(lang: str) -> CapsuleType:
    """
    Import a `tree-sitter-<lang>` package and return its `language()` capsule.

    Raises
    ------
    ValueError
        If no `tree-sitter-<lang>` distribution is installed.
    AttributeError
        When the module does **not** expose `language()`.
    """
    lang = lang.lower()

    module_name = f"tree_sitter_{lang}"
    if module_name not in _MODULE_NAMES:
        raise ValueError(
            f"No tree-sitter package found for language '{lang}'. "
            f"Install 'tree-sitter-{lang}'."
        )

    module = importlib.import_module(module_name)
    if not hasattr(module, "language"):
        raise AttributeError(
            f"The module '{module_name}' does not expose a 'language()' function."
        )

    return getattr(module, "language")()


def get_language(lang: str) -> Language:
    """Return a :class:`tree_sitter.Language` instance for *lang*."""
    return Language(_capsule_from_name(lang))


def get_parser(lang: str) -> Parser:
    """
    Create a fresh :class:`tree_sitter.Parser` for a language.

    A new `Parser` is returned each time since parsers hold mutable state.
    """
    return Parser(get_language(lang))


def get_tree(lang: str, source: Union[str, bytes]) -> Tree:
    """Parse *source* (text is UTF-8 encoded) with the grammar for *lang*."""
    data = source.encode() if isinstance(source, str) else bytes(source)
    return get_parser(lang).parse(data)


def walk(root: Node) -> Iterator[Node]:
    """Yield *root* and all of its descendants in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        # reversed so the leftmost child is visited first
        stack.extend(reversed(node.children))


# Public API
__all__ = ["get_language", "get_parser", "get_tree", "walk"]

# example usage
if __name__ == "__main__":
    from argparse import ArgumentParser, Namespace
    from pathlib import Path

    def parse_args() -> Namespace:
        parser = ArgumentParser(description="Dump the Markdown block tree of a file.")
        parser.add_argument("path", help="Path to a Markdown file")
        return parser.parse_args()

    def dump(root: Node, depth: int = 0, margin: int = 30) -> None:
        """Pretty-print a small subtree."""
        indent = "  " * depth
        txt = root.text[:margin].decode("utf8", errors="replace")
        print(f"{indent}{root.type:2} ({txt!r})")
        for node in root.children:
            dump(node, depth + 1)

    args = parse_args()
    tree = get_tree("markdown", Path(args.path).read_bytes())
    print(f"ABI Version: {tree.language.abi_version}")
    dump(tree.root_node)
