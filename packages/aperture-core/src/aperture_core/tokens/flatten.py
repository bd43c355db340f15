"""Flattening and identity indexing of token trees."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from aperture_core.tokens.models import TokenNode


def identity_of(node: TokenNode) -> str:
    """Diff identity of *node*: its path, or its name when no path is set."""
    return node.identity


def iter_nodes(tree: Iterable[TokenNode]) -> Iterator[TokenNode]:
    """Yield every node of *tree*, depth-first pre-order, in document order."""
    stack: list[TokenNode] = list(reversed(list(tree)))
    while stack:
        node = stack.pop()
        yield node
        # Push in reverse so the first child is visited next
        stack.extend(reversed(node.children))


def flatten(tree: Iterable[TokenNode]) -> list[TokenNode]:
    """Return every token node reachable from the roots.

    Groups are traversed but not emitted. A node counts as a token only by
    its ``type``; a token that carries children still has them visited.
    """
    return [node for node in iter_nodes(tree) if node.is_token]


def index(tokens: Iterable[TokenNode]) -> dict[str, TokenNode]:
    """Map identity -> node. A later duplicate identity overwrites an earlier one."""
    indexed: dict[str, TokenNode] = {}
    for node in tokens:
        indexed[identity_of(node)] = node
    return indexed


def count_leaf_tokens(tree: Iterable[TokenNode]) -> int:
    return sum(1 for node in iter_nodes(tree) if node.is_token)
