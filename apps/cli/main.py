"""CLI application for minver."""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.manifest import locate_manifest, minimize_file
from core.models import DependencyGroup, MinimizationResult, MinimizeReport

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_json_output(report: MinimizeReport) -> str:
    """Format JSON output."""
    reports = []
    for result in report.changes:
        reports.append({
            "name": result.name,
            "original": str(result.original),
            "minimized": str(result.minimized),
            "changed": result.changed,
        })

    return json.dumps({"group": report.group.table_name, "reports": reports}, indent=2)


def changes_table(results: list[MinimizationResult]) -> Table:
    """Build a rich table summarizing changed dependencies."""
    table = Table("Dependency", "Pinned", "Minimal")
    for result in results:
        if result.changed:
            table.add_row(result.name, str(result.original), str(result.minimized))
    return table


app = typer.Typer(
    name="minver",
    help="minver - Rewrite Cargo dependency pins to their minimal compatible versions",
    add_completion=False,
)


@app.command()
def minimize(
    root: Path = typer.Argument(help="Crate root directory or path to Cargo.toml"),
    group: str = typer.Option(
        "dependencies", "--group", "-g", envvar="MINVER_GROUP",
        help="Dependency table: dependencies or dev-dependencies",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show changes without applying"),
    format_type: str = typer.Option("diff", "--format", envvar="MINVER_FORMAT", help="Output format: diff or json"),
    keep_backup: bool = typer.Option(
        False, "--keep-backup", envvar="MINVER_KEEP_BACKUP", help="Keep Cargo.toml.bak after writing",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", envvar="MINVER_VERBOSE", help="Enable debug logging"),
) -> None:
    """minver - Rewrite dependency versions in Cargo.toml to their minimal compatible versions."""
    configure_logging(verbose)

    if format_type not in ("diff", "json"):
        console.print(f"Error: Unsupported format: {format_type}", style="red")
        raise typer.Exit(1)

    try:
        dependency_group = DependencyGroup.from_name(group)
        manifest_path = locate_manifest(root)
        report = minimize_file(
            manifest_path,
            dependency_group,
            dry_run=dry_run,
            keep_backup=keep_backup,
        )

        if format_type == "json":
            # Plain print so rich markup never touches the JSON
            print(format_json_output(report))
        elif not report.has_changes:
            console.print("All dependencies already minimal")
        elif dry_run:
            console.print(report.diff, markup=False, highlight=False)
        else:
            console.print(f"Updated {manifest_path}")
            console.print(changes_table(report.changes))

        for note in report.notes:
            console.print(note, style="dim", markup=False)

        if not report.has_changes:
            raise typer.Exit(2)  # No changes exit code

    except typer.Exit:
        # Re-raise typer exits (like Exit(2) for no changes)
        raise
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
