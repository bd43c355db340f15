"""Tests for token usage analysis."""

from __future__ import annotations

from pathlib import Path

import pytest

from aperture_core.analysis import (
    OrphanedToken,
    TokenUsageReport,
    analyze_usage,
    enum_case_name,
    iter_source_files,
)
from aperture_core.errors import AnalysisError
from aperture_core.tokens import flatten

from builders import make_group, make_token


def _tokens():
    return flatten(
        [
            make_group(
                "Background",
                [
                    make_token("solid", path="Background/Brand/solid"),
                    make_token("subtle", path="Background/Brand/subtle"),
                ],
            ),
            make_token("muted", path="Foreground/Legacy/muted"),
            make_token("primary", path="color/brand/primary"),
        ]
    )


def _write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


# ── enum_case_name ───────────────────────────────────────────────────


class TestEnumCaseName:
    def test_known_category_prefix(self):
        assert enum_case_name("Background/Brand/solid") == "bgBrandSolid"
        assert enum_case_name("Foreground/Legacy/muted") == "fgLegacyMuted"

    def test_other_category_kept(self):
        assert enum_case_name("color/brand/primary") == "colorBrandPrimary"

    def test_separators_inside_segments(self):
        assert enum_case_name("color/button-hover_state") == "colorButtonHoverState"

    def test_leading_digit_prefixed(self):
        assert enum_case_name("100/gray") == "_100Gray"

    def test_empty(self):
        assert enum_case_name("//") == ""


# ── scanning ─────────────────────────────────────────────────────────


class TestIterSourceFiles:
    def test_filters_extensions_and_ignored_dirs(self, tmp_path):
        _write(tmp_path, "App/View.swift", "")
        _write(tmp_path, "App/notes.md", "")
        _write(tmp_path, "Pods/Lib/Dep.swift", "")
        _write(tmp_path, "web/button.TSX", "")
        found = [p.relative_to(tmp_path).as_posix() for p in iter_source_files(tmp_path)]
        assert found == ["App/View.swift", "web/button.TSX"]


class TestAnalyzeUsage:
    def test_used_and_orphaned(self, tmp_path):
        app = tmp_path / "MyApp"
        _write(
            app,
            "ContentView.swift",
            "let a = Color.bgBrandSolid\n"
            "view.background(.bgBrandSolid)\n"
            "let c = colorBrandPrimary\n",
        )
        _write(app, "Other.swift", "// nothing here\n")

        report = analyze_usage(_tokens(), [app])

        assert [t.enum_case for t in report.used_tokens] == ["bgBrandSolid", "colorBrandPrimary"]
        solid = report.used_tokens[0]
        assert solid.original_path == "Background/Brand/solid"
        assert solid.usage_count == 2
        assert [u.line_number for u in solid.usages] == [1, 2]
        assert {u.match_type for u in solid.usages} == {"."}
        assert solid.usages[0].file_path == "MyApp/ContentView.swift"
        assert solid.usages[1].line_content == "view.background(.bgBrandSolid)"
        assert report.used_tokens[1].usages[0].match_type == "name"

        assert [t.enum_case for t in report.orphaned_tokens] == ["bgBrandSubtle", "fgLegacyMuted"]

    def test_partial_identifiers_do_not_match(self, tmp_path):
        _write(tmp_path, "a.swift", "let x = bgBrandSolidDark + mybgBrandSolid\n")
        report = analyze_usage(_tokens(), [tmp_path])
        assert report.used_tokens == []

    def test_longer_case_not_shadowed_by_prefix(self, tmp_path):
        tokens = flatten(
            [
                make_token("solid", path="Background/Brand/solid"),
                make_token("solidHover", path="Background/Brand/solidHover"),
            ]
        )
        _write(tmp_path, "a.swift", ".bgBrandSolidHover\n")
        report = analyze_usage(tokens, [tmp_path])
        assert [t.enum_case for t in report.used_tokens] == ["bgBrandSolidHover"]

    def test_statistics(self, tmp_path):
        first = tmp_path / "one"
        second = tmp_path / "two"
        _write(first, "a.swift", ".bgBrandSolid .bgBrandSolid\n")
        _write(second, "b.kt", "fgLegacyMuted\n")
        _write(second, "c.kt", "")

        report = analyze_usage(_tokens(), [first, second])
        stats = report.statistics

        assert [(d.name, d.files_scanned) for d in report.scanned_directories] == [
            ("one", 1),
            ("two", 2),
        ]
        assert stats.total_tokens == 4
        assert stats.used_count == 2
        assert stats.orphaned_count == 2
        assert stats.total_usages == 3
        assert stats.files_scanned == 3
        assert stats.usage_percentage == pytest.approx(50.0)
        assert stats.orphaned_percentage == pytest.approx(50.0)

    def test_most_used_first(self, tmp_path):
        _write(tmp_path, "a.swift", ".colorBrandPrimary\n.fgLegacyMuted\n.fgLegacyMuted\n")
        report = analyze_usage(_tokens(), [tmp_path])
        assert [t.enum_case for t in report.used_tokens] == ["fgLegacyMuted", "colorBrandPrimary"]

    def test_no_tokens(self, tmp_path):
        _write(tmp_path, "a.swift", ".bgBrandSolid\n")
        report = analyze_usage([], [tmp_path])
        assert report.used_tokens == []
        assert report.statistics.files_scanned == 1
        assert report.statistics.usage_percentage == 0.0

    def test_non_utf8_source_still_scanned(self, tmp_path):
        (tmp_path / "legacy.swift").write_bytes(b"// \xff\xfe\nlet a = .bgBrandSolid\n")
        report = analyze_usage(_tokens(), [tmp_path])
        assert report.used_tokens[0].usages[0].line_number == 2

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(AnalysisError, match="Not a directory"):
            analyze_usage(_tokens(), [tmp_path / "nope"])

    def test_custom_extensions(self, tmp_path):
        _write(tmp_path, "styles.css", "var(--x) /* .bgBrandSolid */\n")
        assert analyze_usage(_tokens(), [tmp_path]).used_tokens == []
        report = analyze_usage(_tokens(), [tmp_path], extensions=[".css"])
        assert report.used_tokens[0].enum_case == "bgBrandSolid"


def test_orphans_grouped_by_category():
    report = TokenUsageReport(
        orphaned_tokens=[
            OrphanedToken(enum_case="fgA", original_path="Foreground/a"),
            OrphanedToken(enum_case="bgA", original_path="Background/a"),
            OrphanedToken(enum_case="fgB", original_path="Foreground/b"),
        ]
    )
    grouped = report.orphaned_by_category()
    assert list(grouped) == ["Background", "Foreground"]
    assert [t.enum_case for t in grouped["Foreground"]] == ["fgA", "fgB"]
