"""CLI entry point for Aperture."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from aperture_core.analysis import analyze_usage
from aperture_core.compare import (
    ComparisonService,
    ReconciliationResult,
    ReconciliationSession,
    TokenComparison,
)
from aperture_core.config import ApertureConfig, load_config
from aperture_core.config.loader import DEFAULT_CONFIG_TEMPLATE, history_dir
from aperture_core.errors import ApertureError
from aperture_core.history import (
    BaselineStore,
    ComparisonHistoryEntry,
    DesignSystemBase,
    FileSnapshot,
    HistoryStore,
    ImportHistoryEntry,
    apply_reconciliation,
)
from aperture_core.log import configure_logging
from aperture_core.tokens import (
    TokenDocument,
    TokenMetadata,
    apply_filters,
    count_leaf_tokens,
    enabled_tokens,
    load_document,
)

app = typer.Typer(
    name="aperture",
    help="Compare and reconcile design-token exports.",
)

history_app = typer.Typer(help="Inspect comparison and import history.")
app.add_typer(history_app, name="history")

baseline_app = typer.Typer(help="Manage the design-system baseline.")
app.add_typer(baseline_app, name="baseline")

config_app = typer.Typer(help="Manage Aperture configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ApertureConfig | None = None


def _get_config() -> ApertureConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to aperture.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


# ── helpers ──────────────────────────────────────────────────────────


def _history_store(cfg: ApertureConfig) -> HistoryStore:
    return HistoryStore(history_dir(cfg) / "history.json", max_entries=cfg.history.max_entries)


def _baseline_store(cfg: ApertureConfig) -> BaselineStore:
    return BaselineStore(history_dir(cfg) / "baseline.json")


def _load_or_exit(path: Path) -> TokenDocument:
    try:
        return load_document(path)
    except ApertureError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _format_metadata(metadata: TokenMetadata | None) -> str:
    if metadata is None:
        return "[dim]no metadata[/dim]"
    exported = metadata.exported_datetime()
    exported_str = exported.strftime("%Y-%m-%d %H:%M") if exported else metadata.exported_at or "-"
    return (
        f"[dim]Exported:[/dim]  {escape(exported_str)}\n"
        f"[dim]Version:[/dim]   {escape(metadata.version or '-')}\n"
        f"[dim]Generator:[/dim] {escape(metadata.generator or '-')}"
    )


def _display_comparison(comparison: TokenComparison, old_name: str, new_name: str) -> None:
    """Display summary panel plus added/removed/modified tables."""
    changes = comparison.changes
    counts = changes.summary()
    rprint(
        Panel(
            f"[bold]{escape(old_name)}[/bold] -> [bold]{escape(new_name)}[/bold]\n\n"
            f"[green]Added:[/green]    {counts['added']}\n"
            f"[red]Removed:[/red]  {counts['removed']}\n"
            f"[yellow]Modified:[/yellow] {counts['modified']}",
            title="Comparison",
            border_style="blue",
        )
    )
    if changes.is_empty:
        rprint("[green]No differences.[/green]")
        return

    if changes.added:
        table = Table(title=f"Added ({len(changes.added)})")
        table.add_column("Path", style="green")
        table.add_column("Name")
        for token in changes.added:
            table.add_row(escape(token.identity), escape(token.name))
        rprint(table)

    if changes.removed:
        table = Table(title=f"Removed ({len(changes.removed)})")
        table.add_column("Path", style="red")
        table.add_column("Suggested replacement", style="cyan")
        table.add_column("Accepted", justify="center")
        for token in changes.removed:
            suggestion = changes.replacement_suggestions.get(token.identity, "-")
            accepted = "yes" if token.identity in changes.accepted_suggestions else ""
            table.add_row(escape(token.identity), escape(suggestion), accepted)
        rprint(table)

    if changes.modified:
        table = Table(title=f"Modified ({len(changes.modified)})")
        table.add_column("Path", style="yellow")
        table.add_column("Brand")
        table.add_column("Theme")
        table.add_column("Old")
        table.add_column("New")
        for modification in changes.modified:
            for change in modification.color_changes:
                table.add_row(
                    escape(modification.token_path),
                    change.brand.value,
                    change.theme.value,
                    escape(change.old_color),
                    escape(change.new_color),
                )
        rprint(table)


def _record_comparison(
    cfg: ApertureConfig, comparison: TokenComparison, old_name: str, new_name: str
) -> None:
    entry = ComparisonHistoryEntry(
        old_file=FileSnapshot(file_name=old_name, metadata=comparison.old_metadata),
        new_file=FileSnapshot(file_name=new_name, metadata=comparison.new_metadata),
        compared_at=comparison.compared_at,
        summary=comparison.changes.summary(),
        changes=comparison.changes,
    )
    try:
        _history_store(cfg).add_comparison_entry(entry)
    except ApertureError as e:
        rprint(f"[yellow]Warning:[/yellow] {escape(str(e))}")


def _set_baseline_or_exit(cfg: ApertureConfig, base: DesignSystemBase) -> None:
    try:
        _baseline_store(cfg).set(base)
    except ApertureError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    rprint(f"[green]Baseline:[/green] {escape(base.file_name)}")


def _parse_mapping(value: str) -> tuple[str, str]:
    removed, sep, replacement = value.partition("=")
    if not sep or not removed or not replacement:
        raise typer.BadParameter(f"expected REMOVED=REPLACEMENT, got {value!r}")
    return removed, replacement


# ── commands ─────────────────────────────────────────────────────────


@app.command()
def compare(
    old: Path = typer.Argument(..., help="Previous token export (JSON)"),
    new: Path = typer.Argument(..., help="New token export (JSON)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    no_suggest: bool = typer.Option(False, "--no-suggest", help="Skip replacement suggestions"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record in history"),
) -> None:
    """Compare two token exports."""
    cfg = _get_config()
    old_doc = _load_or_exit(old)
    new_doc = _load_or_exit(new)

    service = ComparisonService(auto_suggest=cfg.compare.auto_suggest and not no_suggest)
    comparison = service.compare_tokens(old_doc, new_doc)

    if as_json:
        typer.echo(comparison.model_dump_json(by_alias=True, indent=2))
    else:
        _display_comparison(comparison, old.name, new.name)

    if cfg.history.record_comparisons and not no_history:
        _record_comparison(cfg, comparison, old.name, new.name)


@app.command()
def reconcile(
    old: Path = typer.Argument(..., help="Previous token export (JSON)"),
    new: Path = typer.Argument(..., help="New token export (JSON)"),
    accept: list[str] | None = typer.Option(
        None, "--accept", "-a", help="Accept the suggestion for a removed token"
    ),
    accept_all: bool = typer.Option(False, "--accept-all", help="Accept every suggestion"),
    mapping: list[str] | None = typer.Option(
        None, "--map", "-m", help="Set a replacement: REMOVED=REPLACEMENT (accepted)"
    ),
    clear: list[str] | None = typer.Option(
        None, "--clear", help="Drop the suggestion for a removed token"
    ),
    promote: bool = typer.Option(False, "--promote", help="Make NEW the baseline"),
) -> None:
    """Resolve replacements for removed tokens and optionally promote NEW."""
    cfg = _get_config()
    old_doc = _load_or_exit(old)
    new_doc = _load_or_exit(new)

    comparison = ComparisonService(auto_suggest=cfg.compare.auto_suggest).compare_tokens(
        old_doc, new_doc
    )
    session = ReconciliationSession(comparison.changes)
    removed_ids = {summary.identity for summary in comparison.changes.removed}

    for item in mapping or []:
        removed, replacement = _parse_mapping(item)
        if removed not in removed_ids:
            rprint(f"[yellow]Warning:[/yellow] {escape(removed)} is not a removed token, skipping")
            continue
        session.suggest_replacement(removed, replacement)
        session.accept_auto_suggestion(removed)
    for removed in clear or []:
        session.suggest_replacement(removed, None)
    for removed in session.pending() if accept_all else accept or []:
        session.accept_auto_suggestion(removed)

    result = session.finalize()

    table = Table(title=f"Replacements ({len(result.replacements)})")
    table.add_column("Removed", style="red")
    table.add_column("Replacement", style="green")
    for removed, replacement in result.replacements.items():
        table.add_row(escape(removed), escape(replacement))
    rprint(table)
    pending = session.pending()
    if pending:
        rprint(f"[yellow]Pending suggestions:[/yellow] {escape(', '.join(pending))}")
    if result.unresolved:
        rprint(f"[red]Unresolved:[/red] {escape(', '.join(result.unresolved))}")

    if promote:
        _set_baseline_or_exit(cfg, apply_reconciliation(new.name, new_doc, result))


@app.command()
def inspect(
    file: Path = typer.Argument(..., help="Token export (JSON)"),
) -> None:
    """Show metadata and token counts for a token export."""
    cfg = _get_config()
    doc = _load_or_exit(file)
    filtered = apply_filters(doc.tokens, cfg.filters)
    total = count_leaf_tokens(doc.tokens)
    enabled = len(enabled_tokens(filtered))
    rprint(Panel(_format_metadata(doc.metadata), title=escape(file.name), border_style="blue"))
    rprint(f"[bold]Tokens:[/bold] {total} ({enabled} enabled for export)")

    try:
        _history_store(cfg).add_import_entry(
            ImportHistoryEntry(file_name=file.name, metadata=doc.metadata, token_count=total)
        )
    except ApertureError as e:
        rprint(f"[yellow]Warning:[/yellow] {escape(str(e))}")


# ── analyze ──────────────────────────────────────────────────────────


@app.command()
def analyze(
    file: Path = typer.Argument(..., help="Token export (JSON)"),
    directories: list[Path] = typer.Argument(..., help="Source directories to scan"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Report which exported tokens are used in DIRECTORIES and which are orphaned."""
    cfg = _get_config()
    doc = _load_or_exit(file)
    tokens = enabled_tokens(apply_filters(doc.tokens, cfg.filters))
    try:
        report = analyze_usage(
            tokens,
            directories,
            extensions=cfg.analysis.extensions,
            ignore_patterns=cfg.analysis.ignore_patterns,
        )
    except ApertureError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        data = report.model_dump(mode="json")
        data["statistics"] = report.statistics.model_dump()
        typer.echo(json.dumps(data, indent=2))
        return

    stats = report.statistics
    rprint(
        Panel(
            f"[green]Used:[/green]        {stats.used_count} ({stats.usage_percentage:.0f}%)\n"
            f"[yellow]Orphaned:[/yellow]    {stats.orphaned_count} ({stats.orphaned_percentage:.0f}%)\n"
            f"[blue]Occurrences:[/blue] {stats.total_usages} in {stats.files_scanned} files",
            title="Token usage",
            border_style="blue",
        )
    )

    table = Table(title="Scanned directories")
    table.add_column("Directory", style="cyan")
    table.add_column("Files", justify="right")
    for directory in report.scanned_directories:
        table.add_row(escape(directory.name), str(directory.files_scanned))
    rprint(table)

    top = report.used_tokens[: cfg.analysis.top_used]
    if top:
        table = Table(title="Most used")
        table.add_column("Token", style="green")
        table.add_column("Path")
        table.add_column("Usages", justify="right")
        for token in top:
            table.add_row(escape(token.enum_case), escape(token.original_path), str(token.usage_count))
        rprint(table)

    grouped = report.orphaned_by_category()
    if grouped:
        table = Table(title="Orphaned by category")
        table.add_column("Category", style="yellow")
        table.add_column("Tokens", justify="right")
        for category, orphans in grouped.items():
            table.add_row(escape(category), str(len(orphans)))
        rprint(table)


# ── history ──────────────────────────────────────────────────────────


@history_app.command("list")
def history_list(
    as_json: bool = typer.Option(False, "--json", help="Print history as JSON"),
) -> None:
    """List recent comparisons and imports."""
    store = _history_store(_get_config())
    comparisons = store.get_comparison_history()
    imports = store.get_import_history()

    if as_json:
        data = {
            "comparisons": [e.model_dump(mode="json", by_alias=True) for e in comparisons],
            "imports": [e.model_dump(mode="json", by_alias=True) for e in imports],
        }
        typer.echo(json.dumps(data, indent=2))
        return

    if not comparisons and not imports:
        rprint("[dim]History is empty.[/dim]")
        return

    table = Table(title=f"Comparisons ({len(comparisons)})")
    table.add_column("Id", style="dim")
    table.add_column("Old", style="cyan")
    table.add_column("New", style="cyan")
    table.add_column("When")
    table.add_column("+/-/~", justify="right")
    for entry in comparisons:
        s = entry.summary
        table.add_row(
            entry.id[:8],
            escape(entry.old_file.file_name),
            escape(entry.new_file.file_name),
            entry.compared_at.strftime("%Y-%m-%d %H:%M"),
            f"{s.get('added', 0)}/{s.get('removed', 0)}/{s.get('modified', 0)}",
        )
    rprint(table)

    table = Table(title=f"Imports ({len(imports)})")
    table.add_column("File", style="cyan")
    table.add_column("When")
    table.add_column("Tokens", justify="right")
    for entry in imports:
        table.add_row(
            escape(entry.file_name),
            entry.imported_at.strftime("%Y-%m-%d %H:%M"),
            str(entry.token_count),
        )
    rprint(table)


@history_app.command("clear")
def history_clear() -> None:
    """Remove all history entries."""
    store = _history_store(_get_config())
    store.clear_comparison_history()
    store.clear_import_history()
    rprint("[green]History cleared.[/green]")


# ── baseline ─────────────────────────────────────────────────────────


@baseline_app.command("show")
def baseline_show() -> None:
    """Show the current baseline."""
    base = _baseline_store(_get_config()).get()
    if base is None:
        rprint("[dim]No baseline set.[/dim]")
        return
    body = _format_metadata(base.metadata) + f"\n[dim]Tokens:[/dim]    {count_leaf_tokens(base.tokens)}"
    if base.replacements:
        body += f"\n[dim]Replacements:[/dim] {len(base.replacements)}"
    rprint(Panel(body, title=f"Baseline: {escape(base.file_name)}", border_style="green"))


@baseline_app.command("set")
def baseline_set(
    file: Path = typer.Argument(..., help="Token export (JSON)"),
) -> None:
    """Use FILE as the baseline."""
    cfg = _get_config()
    doc = _load_or_exit(file)
    _set_baseline_or_exit(cfg, apply_reconciliation(file.name, doc, ReconciliationResult()))


@baseline_app.command("clear")
def baseline_clear() -> None:
    """Forget the current baseline."""
    _baseline_store(_get_config()).clear()
    rprint("[green]Baseline cleared.[/green]")


@baseline_app.command("compare")
def baseline_compare(
    file: Path = typer.Argument(..., help="New token export (JSON)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Compare FILE against the baseline."""
    cfg = _get_config()
    base = _baseline_store(cfg).get()
    if base is None:
        rprint("[red]Error:[/red] no baseline set (use `aperture baseline set FILE`)")
        raise typer.Exit(1)
    new_doc = _load_or_exit(file)
    old_doc = TokenDocument(metadata=base.metadata, tokens=base.tokens)

    comparison = ComparisonService(auto_suggest=cfg.compare.auto_suggest).compare_tokens(
        old_doc, new_doc
    )
    if as_json:
        typer.echo(comparison.model_dump_json(by_alias=True, indent=2))
    else:
        _display_comparison(comparison, base.file_name, file.name)
    if cfg.history.record_comparisons:
        _record_comparison(cfg, comparison, base.file_name, file.name)


# ── config ───────────────────────────────────────────────────────────


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing aperture.yaml"),
) -> None:
    """Write a default aperture.yaml in the current directory."""
    target = Path("aperture.yaml")
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists (use --force to overwrite).[/yellow]")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created:[/green] {target}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    cfg = _get_config()
    typer.echo(yaml.safe_dump(cfg.model_dump(), sort_keys=False))


if __name__ == "__main__":
    app()
