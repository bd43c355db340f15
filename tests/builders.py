"""Builders for token trees and exporter-shaped JSON files used across tests."""

import json

from aperture_core.tokens.models import NodeType, TokenNode, TokenThemes


def make_token(name, path=None, modes=None, **kwargs):
    """Build a token node; *modes* may be a dict in exporter JSON shape."""
    if isinstance(modes, dict):
        modes = TokenThemes.model_validate(modes)
    return TokenNode(name=name, type=NodeType.token, path=path, modes=modes, **kwargs)


def make_group(name, children, path=None):
    return TokenNode(name=name, type=NodeType.group, path=path, children=children)


def light(hex_value, primitive=""):
    """Modes with only a legacy light value."""
    return {"legacy": {"light": {"hex": hex_value, "primitiveName": primitive}}}


def write_document(path, tokens, metadata=None):
    """Serialize nodes to an exporter-shaped JSON file and return the path."""
    data = {"tokens": [t.model_dump(mode="json", by_alias=True) for t in tokens]}
    if metadata is not None:
        data["metadata"] = metadata
    path.write_text(json.dumps(data))
    return path
