"""Load token documents from JSON exporter output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from aperture_core.errors import TokenLoadError
from aperture_core.tokens.flatten import count_leaf_tokens
from aperture_core.tokens.models import TokenDocument

logger = logging.getLogger(__name__)


def parse_document(data: Any, source: str = "<memory>") -> TokenDocument:
    """Build a TokenDocument from decoded JSON.

    Accepts either ``{"metadata": {...}, "tokens": [...]}`` or a bare list of
    nodes. Nodes without an ``id`` get a fresh one.
    """
    if isinstance(data, list):
        data = {"tokens": data}
    if not isinstance(data, dict):
        raise TokenLoadError(source, f"expected an object or a list, got {type(data).__name__}")
    if "tokens" not in data:
        raise TokenLoadError(source, "missing 'tokens' key")
    try:
        document = TokenDocument.model_validate(data)
    except ValidationError as e:
        raise TokenLoadError(source, str(e)) from e
    logger.debug("Parsed %d tokens from %s", count_leaf_tokens(document.tokens), source)
    return document


def load_document(path: str | Path) -> TokenDocument:
    """Read and parse a token JSON file."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TokenLoadError(str(path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise TokenLoadError(str(path), f"not valid UTF-8: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise TokenLoadError(str(path), f"invalid JSON: {e}") from e
    return parse_document(data, source=str(path))
