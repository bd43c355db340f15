"""Design-token tree models, loading, flattening and export filters."""

from aperture_core.tokens.colors import colors_equal, normalize_hex
from aperture_core.tokens.filters import TokenFilters, apply_filters, enabled_tokens
from aperture_core.tokens.flatten import count_leaf_tokens, flatten, identity_of, index, iter_nodes
from aperture_core.tokens.loader import load_document, parse_document
from aperture_core.tokens.models import (
    Appearance,
    Brand,
    NodeType,
    Theme,
    TokenDocument,
    TokenMetadata,
    TokenNode,
    TokenThemes,
    TokenValue,
)

__all__ = [
    "Appearance",
    "Brand",
    "NodeType",
    "Theme",
    "TokenDocument",
    "TokenFilters",
    "TokenMetadata",
    "TokenNode",
    "TokenThemes",
    "TokenValue",
    "apply_filters",
    "colors_equal",
    "count_leaf_tokens",
    "enabled_tokens",
    "flatten",
    "identity_of",
    "index",
    "iter_nodes",
    "load_document",
    "normalize_hex",
    "parse_document",
]
