"""Shared test fixtures for Aperture."""

import logging

import pytest

from aperture_core.config.models import ApertureConfig
from builders import light, make_group, make_token, write_document


@pytest.fixture(autouse=True)
def _reset_aperture_loggers():
    """CLI runs install handlers; give each test pristine loggers."""
    yield
    for name in ("aperture_core", "aperture"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


@pytest.fixture
def sample_config():
    return ApertureConfig()


@pytest.fixture
def old_tree():
    """A small exporter-shaped tree: two groups, four tokens."""
    return [
        make_group(
            "color",
            path="color",
            children=[
                make_group(
                    "brand",
                    path="color/brand",
                    children=[
                        make_token(
                            "primary",
                            path="color/brand/primary",
                            modes={
                                "legacy": {
                                    "light": {"hex": "#112233", "primitiveName": "blue-500"},
                                    "dark": {"hex": "#445566", "primitiveName": "blue-300"},
                                },
                                "newBrand": {
                                    "light": {"hex": "#000000", "primitiveName": "ink"},
                                    "dark": {"hex": "#FFFFFF", "primitiveName": "paper"},
                                },
                            },
                        ),
                        make_token("secondary", path="color/brand/secondary", modes=light("#AABBCC")),
                    ],
                ),
                make_token("danger", path="color/danger", modes=light("#FF0000")),
            ],
        ),
        make_token("legacy_only", path="misc/legacy_only", modes=light("#010101")),
    ]


@pytest.fixture
def new_tree():
    """Same as old_tree with one modification, one removal and one addition."""
    return [
        make_group(
            "color",
            path="color",
            children=[
                make_group(
                    "brand",
                    path="color/brand",
                    children=[
                        make_token(
                            "primary",
                            path="color/brand/primary",
                            modes={
                                "legacy": {
                                    "light": {"hex": "#112233", "primitiveName": "blue-500"},
                                    "dark": {"hex": "#445567", "primitiveName": "blue-300"},
                                },
                                "newBrand": {
                                    "light": {"hex": "#000000", "primitiveName": "ink"},
                                    "dark": {"hex": "#EEEEEE", "primitiveName": "paper-2"},
                                },
                            },
                        ),
                        make_token("secondary", path="color/brand/secondary", modes=light("#aabbcc")),
                        make_token("tertiary", path="color/brand/tertiary", modes=light("#123456")),
                    ],
                ),
                make_token("danger", path="color/danger", modes=light("#FF0000")),
            ],
        ),
    ]


@pytest.fixture
def token_files(tmp_path, old_tree, new_tree):
    """old.json / new.json written from the sample trees."""
    meta_old = {"exportedAt": "2026-01-28 14:30:45", "version": "2.0.0", "generator": "ApertureExporter"}
    meta_new = {"exportedAt": "2026-02-10T09:00:00", "version": "2.1.0", "generator": "ApertureExporter"}
    old_path = write_document(tmp_path / "old.json", old_tree, meta_old)
    new_path = write_document(tmp_path / "new.json", new_tree, meta_new)
    return old_path, new_path
