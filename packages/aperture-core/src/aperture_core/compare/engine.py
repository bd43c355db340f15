"""Structural diff of two token trees."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from aperture_core.compare.models import (
    ColorChange,
    ComparisonChanges,
    TokenComparison,
    TokenModification,
    TokenSummary,
)
from aperture_core.compare.suggest import candidates_for, suggest
from aperture_core.tokens.colors import colors_equal
from aperture_core.tokens.flatten import flatten, index
from aperture_core.tokens.models import Brand, Theme, TokenDocument, TokenNode, TokenThemes

logger = logging.getLogger(__name__)

# Order in which color slots are reported for a modified token
SLOTS: tuple[tuple[Brand, Theme], ...] = (
    (Brand.legacy, Theme.light),
    (Brand.legacy, Theme.dark),
    (Brand.new_brand, Theme.light),
    (Brand.new_brand, Theme.dark),
)


def compare(old: Sequence[TokenNode], new: Sequence[TokenNode]) -> ComparisonChanges:
    """Compare an *old* tree against a *new* one.

    Tokens are matched by identity (path, else name). Added and removed
    lists follow the traversal order of the tree they come from.
    """
    old_index = index(flatten(old))
    new_index = index(flatten(new))

    added = [
        TokenSummary.from_node(node)
        for key, node in new_index.items()
        if key not in old_index
    ]
    removed = [
        TokenSummary.from_node(node)
        for key, node in old_index.items()
        if key not in new_index
    ]

    modified: list[TokenModification] = []
    for key, old_node in old_index.items():
        new_node = new_index.get(key)
        if new_node is None or old_node.modes is None or new_node.modes is None:
            continue
        changes = color_changes(old_node.modes, new_node.modes)
        if changes:
            modified.append(
                TokenModification(
                    token_path=key,
                    token_name=old_node.name,
                    color_changes=changes,
                )
            )

    result = ComparisonChanges(added=added, removed=removed, modified=modified)
    logger.debug(
        "Compared %d old / %d new tokens: %s",
        len(old_index),
        len(new_index),
        result.summary(),
    )
    return result


def color_changes(old_modes: TokenThemes, new_modes: TokenThemes) -> list[ColorChange]:
    """Slots defined on both sides whose normalized colors differ."""
    changes: list[ColorChange] = []
    for brand, theme in SLOTS:
        old_value = old_modes.value(brand, theme)
        new_value = new_modes.value(brand, theme)
        if old_value is None or new_value is None:
            continue
        if colors_equal(old_value.hex, new_value.hex):
            continue
        changes.append(
            ColorChange(
                brand=brand,
                theme=theme,
                old_color=old_value.hex,
                new_color=new_value.hex,
            )
        )
    return changes


def compare_documents(
    old: TokenDocument,
    new: TokenDocument,
    *,
    auto_suggest: bool = True,
) -> TokenComparison:
    """Compare two loaded documents and attach their metadata.

    With *auto_suggest*, replacement hints for removed tokens are filled in
    but never accepted.
    """
    changes = compare(old.tokens, new.tokens)
    if auto_suggest and changes.removed:
        hints = suggest(changes.removed, candidates_for(changes, new.tokens))
        changes.replacement_suggestions.update(hints)
        logger.debug("Suggested replacements for %d of %d removed tokens", len(hints), len(changes.removed))
    return TokenComparison(
        changes=changes,
        old_metadata=old.metadata,
        new_metadata=new.metadata,
    )


class ComparisonService:
    """Runs one comparison at a time.

    Instances share no state, so separate services may compare different
    file pairs concurrently.
    """

    def __init__(self, auto_suggest: bool = True) -> None:
        self.auto_suggest = auto_suggest
        self._lock = threading.Lock()

    def compare_tokens(self, old: TokenDocument, new: TokenDocument) -> TokenComparison:
        with self._lock:
            return compare_documents(old, new, auto_suggest=self.auto_suggest)
