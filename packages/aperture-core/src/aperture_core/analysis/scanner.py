"""Scan source directories for references to exported tokens."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from aperture_core.analysis.models import (
    OrphanedToken,
    ScannedDirectory,
    TokenUsage,
    TokenUsageReport,
    UsedToken,
)
from aperture_core.errors import AnalysisError
from aperture_core.tokens.models import TokenNode

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".swift", ".m", ".kt", ".java", ".ts", ".tsx", ".js", ".jsx")
DEFAULT_IGNORE_PATTERNS = (".git", ".build", "build", "DerivedData", "Pods", "node_modules")

# Leading path segments that exporters shorten in generated names
_CATEGORY_PREFIXES = {
    "background": "bg",
    "foreground": "fg",
}

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")


def enum_case_name(path: str) -> str:
    """Generated identifier for a token path.

    ``Background/Brand/solid`` -> ``bgBrandSolid``. The first word is
    lower-cased (and shortened for known categories), later words are
    capitalized.
    """
    words = [w for w in _WORD_SPLIT.split(path) if w]
    if not words:
        return ""
    first = words[0].lower()
    first = _CATEGORY_PREFIXES.get(first, first)
    name = first + "".join(w[0].upper() + w[1:] for w in words[1:])
    if name[0].isdigit():
        name = "_" + name
    return name


def _matches_any(path: Path, patterns: set[str]) -> bool:
    return any(part in patterns for part in path.parts)


def iter_source_files(
    root: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> Iterator[Path]:
    """Yield files under *root* with a matching extension, in sorted order."""
    suffixes = {ext.lower() for ext in extensions}
    ignore = set(ignore_patterns)
    for p in sorted(root.rglob("*")):
        if not p.is_file() or p.suffix.lower() not in suffixes:
            continue
        if _matches_any(p.relative_to(root), ignore):
            continue
        yield p


def _reference_pattern(enum_cases: Iterable[str]) -> re.Pattern[str] | None:
    # Longest first so a case never shadows a longer one sharing its prefix
    alternatives = sorted((re.escape(c) for c in enum_cases if c), key=len, reverse=True)
    if not alternatives:
        return None
    return re.compile(r"(?:(\.)|(?<![\w$]))(" + "|".join(alternatives) + r")(?![\w$])")


def analyze_usage(
    tokens: Sequence[TokenNode],
    directories: Sequence[str | Path],
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
) -> TokenUsageReport:
    """Find which of *tokens* are referenced from source files in *directories*.

    *tokens* is a flattened token list (see ``flatten``). Each token is
    looked up by its generated enum case name; tokens sharing a name are
    reported once, under the last one's path.
    """
    by_case: dict[str, str] = {}
    for node in tokens:
        by_case[enum_case_name(node.identity)] = node.identity

    pattern = _reference_pattern(by_case)
    usages: dict[str, list[TokenUsage]] = {case: [] for case in by_case}
    scanned: list[ScannedDirectory] = []
    extensions = tuple(extensions)
    ignore_patterns = tuple(ignore_patterns)

    for directory in directories:
        root = Path(directory).expanduser()
        if not root.is_dir():
            raise AnalysisError(f"Not a directory: {root}")
        files_scanned = 0
        for source in iter_source_files(root, extensions, ignore_patterns):
            try:
                text = source.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", source, e)
                continue
            files_scanned += 1
            if pattern is None:
                continue
            rel = (Path(root.name) / source.relative_to(root)).as_posix()
            for line_number, line in enumerate(text.splitlines(), start=1):
                for match in pattern.finditer(line):
                    usages[match.group(2)].append(
                        TokenUsage(
                            file_path=rel,
                            line_number=line_number,
                            line_content=line.strip(),
                            match_type="." if match.group(1) else "name",
                        )
                    )
        scanned.append(ScannedDirectory(name=root.name, path=str(root), files_scanned=files_scanned))
        logger.debug("Scanned %d files in %s", files_scanned, root)

    used = [
        UsedToken(enum_case=case, original_path=path, usages=usages[case])
        for case, path in by_case.items()
        if usages[case]
    ]
    used.sort(key=lambda t: t.usage_count, reverse=True)
    orphaned = [
        OrphanedToken(enum_case=case, original_path=path)
        for case, path in by_case.items()
        if not usages[case]
    ]
    report = TokenUsageReport(
        scanned_directories=scanned,
        used_tokens=used,
        orphaned_tokens=orphaned,
    )
    logger.info(
        "Usage analysis: %d used, %d orphaned",
        len(report.used_tokens),
        len(report.orphaned_tokens),
    )
    return report
