"""
Command-line interface for emberdeps
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from emberdeps.extractor import extract_file, process_directory
from emberdeps.models import ExtractionFailure, FileDependencies, FileKind, Namespace
from emberdeps.scanner import file_kind_for
from emberdeps.serializer import results_to_dict, save_results
from emberdeps.session import PARSE_ERRORS

# Create a console instance for all output
console = Console()

_NAMESPACE_STYLES = {
    Namespace.CONTROLLER: "cyan",
    Namespace.TEMPLATE: "green",
    Namespace.VIEW: "magenta",
}


def _relative_path(filepath: str | Path, base_dir: Path) -> Path:
    """Get path relative to base_dir, or unchanged if not under base_dir."""
    path = Path(filepath)
    try:
        return path.relative_to(base_dir)
    except ValueError:
        return path


def _mappings(result: FileDependencies) -> list[tuple[Namespace, dict[str, str]]]:
    return [
        (Namespace.CONTROLLER, result.controllers),
        (Namespace.TEMPLATE, result.templates),
        (Namespace.VIEW, result.views),
    ]


def print_file_result(result: FileDependencies) -> None:
    """Print the mappings and ordered names of a single file."""
    title = rich_escape(str(result.path)) if result.path else "stdin"
    console.print(Panel(
        f"[bold]{title}[/] [dim]({result.file_kind.value})[/]",
        style="blue",
        expand=False,
    ))

    if result.is_empty:
        console.print("[dim]No dependencies found.[/]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Namespace", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Full name")

    for namespace, mapping in _mappings(result):
        style = _NAMESPACE_STYLES[namespace]
        for short_name, full_name in mapping.items():
            table.add_row(
                namespace.value,
                rich_escape(short_name),
                f"[{style}]{rich_escape(full_name)}[/]",
            )

    console.print(table)

    if result.names:
        console.print("\n[bold]Reference order:[/]")
        for i, name in enumerate(result.names, 1):
            console.print(f"  {i}. {rich_escape(name)}")


def print_directory_results(
    results: list[FileDependencies],
    failures: list[ExtractionFailure],
    base_dir: Path,
) -> None:
    """Print a summary and a per-file table for a scanned directory."""
    unique_names = {name for r in results for name in r.names}

    summary = Text()
    summary.append("Files analyzed: ", style="bold")
    summary.append(f"{len(results)}\n", style="cyan bold")
    summary.append("Failed:         ", style="bold")
    summary.append(f"{len(failures)}\n", style="red bold" if failures else "green bold")
    summary.append("Dependencies:   ", style="bold")
    summary.append(f"{len(unique_names)}", style="green bold")

    console.print(Panel(summary, title="[bold blue]Dependency Scan[/]", border_style="blue"))

    with_deps = [r for r in results if not r.is_empty]
    if with_deps:
        table = Table(title="Dependencies by File", show_header=True, header_style="bold magenta")
        table.add_column("File", style="cyan")
        table.add_column("Kind", style="dim")
        table.add_column("Dependencies")

        for result in with_deps:
            rel_path = _relative_path(result.path, base_dir)
            table.add_row(
                rich_escape(str(rel_path)),
                result.file_kind.value,
                rich_escape(", ".join(result.all_names)),
            )

        console.print(table)

    if failures:
        console.print("\n[bold yellow]Could not analyze:[/]")
        for failure in failures:
            rel_path = _relative_path(failure.path, base_dir)
            console.print(
                f"  [yellow]{rich_escape(str(rel_path))}[/] - {rich_escape(failure.message)}"
            )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _extract_single_file(
    filepath: Path,
    kind_option: Optional[str],
    source_type: str,
) -> Optional[FileDependencies]:
    """Extract one file for the CLI, printing errors. None on failure."""
    if kind_option is None and file_kind_for(filepath) is None:
        console.print(
            f"[bold red]Error:[/] Cannot determine file kind for "
            f"{rich_escape(str(filepath))}; use --kind"
        )
        return None

    try:
        result = extract_file(filepath, file_kind=kind_option, source_type=source_type)
    except PARSE_ERRORS as e:
        console.print(f"[bold red]Syntax error in {rich_escape(str(filepath))}:[/] {rich_escape(str(e))}")
        return None
    except RecursionError:
        console.print(f"[bold red]Error:[/] {rich_escape(str(filepath))} is nested too deeply to analyze")
        return None

    if result is None:
        console.print(f"[bold red]Error:[/] Could not read {rich_escape(str(filepath))}")
    return result


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract Ember controller, template and view dependencies"
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Script/template file or directory to scan"
    )
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in FileKind],
        help="File kind for a single file (default: from the extension); not allowed for directories"
    )
    parser.add_argument(
        "--module",
        action="store_true",
        help="Parse JavaScript as ES modules (import/export)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Save results to JSON file"
    )
    parser.add_argument(
        "--no-ignore",
        action="store_true",
        help="Don't ignore common directories (node_modules, dist, etc.)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    source_type = "module" if args.module else "script"

    if not args.path.exists():
        console.print(f"[bold red]Error:[/] Path does not exist: {rich_escape(str(args.path))}")
        return 1

    if args.kind and args.path.is_dir():
        parser.error("--kind applies to a single file, not a directory")

    if args.path.is_dir():
        ignore_dirs = frozenset() if args.no_ignore else None
        results, failures = process_directory(
            args.path, ignore_dirs=ignore_dirs, source_type=source_type,
        )
    else:
        result = _extract_single_file(args.path, args.kind, source_type)
        if result is None:
            return 1
        results, failures = [result], []

    if args.json:
        console.print_json(data=results_to_dict(results, failures))
    elif args.path.is_dir():
        print_directory_results(results, failures, args.path)
    else:
        print_file_result(results[0])

    if args.output:
        save_results(results, failures, args.output)
        console.print(f"\n[bold green]✓[/] Results saved to [underline]{rich_escape(str(args.output))}[/]")

    return 0


if __name__ == "__main__":
    exit(main())
