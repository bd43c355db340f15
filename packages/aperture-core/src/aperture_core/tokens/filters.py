"""Export filters: flag tokens the export step should skip."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from aperture_core.tokens.flatten import flatten
from aperture_core.tokens.models import TokenNode

HOVER_SUFFIX = "_hover"


class TokenFilters(BaseModel):
    exclude_tokens_starting_with_hash: bool = False
    exclude_tokens_ending_with_hover: bool = False

    def excludes(self, node: TokenNode) -> bool:
        if not node.is_token:
            return False
        if self.exclude_tokens_starting_with_hash and node.name.startswith("#"):
            return True
        if self.exclude_tokens_ending_with_hover and node.name.endswith(HOVER_SUFFIX):
            return True
        return False


def apply_filters(tree: Iterable[TokenNode], filters: TokenFilters) -> list[TokenNode]:
    """Return a copy of *tree* with excluded tokens marked ``is_enabled=False``.

    Tokens that are already disabled stay disabled; the input is not modified.
    """
    return [_filter_node(node, filters) for node in tree]


def _filter_node(node: TokenNode, filters: TokenFilters) -> TokenNode:
    children = [_filter_node(child, filters) for child in node.children]
    enabled = node.is_enabled and not filters.excludes(node)
    return node.model_copy(update={"children": children, "is_enabled": enabled})


def enabled_tokens(tree: Iterable[TokenNode]) -> list[TokenNode]:
    """Flattened tokens an export collaborator should emit."""
    return [node for node in flatten(tree) if node.is_enabled]
