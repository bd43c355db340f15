"""Pydantic models for design-token trees."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Formats seen in the ``exportedAt`` field of exporter output.
EXPORTED_AT_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%d",
)


def new_node_id() -> str:
    return uuid.uuid4().hex


class NodeType(str, Enum):
    group = "group"
    token = "token"


class Brand(str, Enum):
    legacy = "legacy"
    new_brand = "newBrand"


class Theme(str, Enum):
    light = "light"
    dark = "dark"


class TokenValue(BaseModel):
    """A single color value for one brand/appearance slot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hex: str
    primitive_name: str = Field(default="", alias="primitiveName")


class Appearance(BaseModel):
    """Light and dark values for one brand."""

    model_config = ConfigDict(frozen=True)

    light: TokenValue | None = None
    dark: TokenValue | None = None

    def get(self, theme: Theme) -> TokenValue | None:
        return self.light if theme is Theme.light else self.dark


class TokenThemes(BaseModel):
    """Per-brand appearances of a token (the ``modes`` object)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    legacy: Appearance | None = None
    new_brand: Appearance | None = Field(default=None, alias="newBrand")

    def get(self, brand: Brand) -> Appearance | None:
        return self.legacy if brand is Brand.legacy else self.new_brand

    def value(self, brand: Brand, theme: Theme) -> TokenValue | None:
        appearance = self.get(brand)
        if appearance is None:
            return None
        return appearance.get(theme)


class TokenNode(BaseModel):
    """A group or token in a design-token tree.

    ``children`` is always a list: an empty list means "no children" for
    both groups and tokens. Only ``type`` decides whether a node is a token.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_node_id)
    name: str
    type: NodeType
    path: str | None = None
    is_enabled: bool = Field(default=True, alias="isEnabled")
    children: list[TokenNode] = Field(default_factory=list)
    modes: TokenThemes | None = None

    @field_validator("children", mode="before")
    @classmethod
    def _null_children_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def identity(self) -> str:
        """Diff key: the path when recorded, else the name."""
        return self.path if self.path is not None else self.name

    @property
    def is_token(self) -> bool:
        return self.type is NodeType.token


class TokenMetadata(BaseModel):
    """Exporter metadata attached to a token document. Never diffed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    exported_at: str = Field(default="", alias="exportedAt")
    timestamp: int | None = None
    version: str = ""
    generator: str = ""

    def exported_datetime(self) -> datetime | None:
        for fmt in EXPORTED_AT_FORMATS:
            try:
                return datetime.strptime(self.exported_at, fmt)
            except ValueError:
                continue
        return None


class TokenDocument(BaseModel):
    """One loaded token file: optional metadata plus the root nodes."""

    model_config = ConfigDict(frozen=True)

    metadata: TokenMetadata | None = None
    tokens: list[TokenNode] = Field(default_factory=list)
