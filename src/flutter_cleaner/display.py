"""Rich terminal and JSON display for flutter-cache-cleaner."""

import json

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from flutter_cleaner.models import (
    CacheTarget,
    CleanOutcome,
    ProjectInfo,
    ScanResult,
    format_size,
)

console = Console()
err_console = Console(stderr=True)


def configure(quiet: bool = False, color: bool = True) -> None:
    """Apply global output flags to both consoles."""
    console.quiet = quiet
    for c in (console, err_console):
        c.no_color = not color


def print_json(data: dict) -> None:
    """Print machine-readable output, ignoring --quiet."""
    print(json.dumps(data))


def show_error(message: str) -> None:
    err_console.print(f"[red]{message}[/red]", highlight=False)


# =============================================================================
# JSON builders
# =============================================================================


def target_to_json(target: CacheTarget) -> dict:
    return {"type": target.kind, "path": target.path, "size": target.size_bytes}


def project_to_json(project: ProjectInfo) -> dict:
    return {
        "path": project.path,
        "targets": [target_to_json(t) for t in project.targets],
        "totalSize": project.total_size,
    }


def scan_result_to_json(result: ScanResult) -> dict:
    return {
        "priorityProjects": [project_to_json(p) for p in result.priority_projects],
        "defaultProjects": [project_to_json(p) for p in result.default_projects],
        "globalTargets": [target_to_json(t) for t in result.global_targets],
        "summary": {
            "totalProjects": result.project_count,
            "priorityProjects": len(result.priority_projects),
            "defaultProjects": len(result.default_projects),
            "globalTargets": len(result.global_targets),
            "totalReclaimableSize": result.total_size,
        },
    }


def clean_outcome_to_json(outcome: CleanOutcome) -> dict:
    return {
        "deletedPaths": sorted(outcome.deleted_paths),
        "failedPaths": outcome.failed_paths,
        "reclaimedSize": outcome.reclaimed_bytes,
        "success": outcome.success,
    }


# =============================================================================
# Human-readable output
# =============================================================================


def _projects_table(title: str, projects: list[ProjectInfo], verbose: bool) -> Table:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Project")
    table.add_column("Targets", justify="right")
    table.add_column("Reclaimable", justify="right")

    for project in projects:
        table.add_row(project.path, str(len(project.targets)), format_size(project.total_size))
        if verbose:
            for target in project.targets:
                table.add_row(f"  [dim]{target.kind}[/dim]", "", format_size(target.size_bytes))
    return table


def show_scan_result(result: ScanResult, verbose: bool = False) -> None:
    """Display scan results."""
    console.print()
    console.print("[bold]Flutter Cache Cleaner - Scan Results[/bold]")

    if result.priority_projects:
        console.print(
            _projects_table(
                f"Priority Roots ({len(result.priority_projects)} projects)",
                result.priority_projects,
                verbose,
            )
        )

    if result.default_projects:
        console.print(
            _projects_table(
                f"Default Roots ({len(result.default_projects)} projects)",
                result.default_projects,
                verbose,
            )
        )

    if result.global_targets:
        table = Table(
            title=f"Global Caches ({len(result.global_targets)} targets)",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Cache")
        table.add_column("Size", justify="right")
        if verbose:
            table.add_column("Path")
        for target in result.global_targets:
            row = [target.kind, format_size(target.size_bytes)]
            if verbose:
                row.append(target.path)
            table.add_row(*row)
        console.print(table)

    console.print(
        Panel(
            f"Total projects: {result.project_count}\n"
            f"  Priority projects: {len(result.priority_projects)}\n"
            f"  Default projects: {len(result.default_projects)}\n"
            f"Global targets: {len(result.global_targets)}\n"
            f"[bold]Total reclaimable: {format_size(result.total_size)}[/bold]",
            title="Summary",
            border_style="blue",
        )
    )


def show_clean_summary(result: ScanResult, verbose: bool = False) -> None:
    """Display what a clean is about to delete."""
    console.print()
    console.print("[bold]Flutter Cache Cleaner - Clean Summary[/bold]")
    console.print(f"Projects to clean: {result.project_count}")
    console.print(f"Global targets: {len(result.global_targets)}")
    console.print(f"[bold]Total reclaimable: {format_size(result.total_size)}[/bold]")

    if verbose:
        console.print("\nProjects:")
        for project in result.all_projects:
            console.print(f"  - {project.path} ({format_size(project.total_size)})")
        if result.global_targets:
            console.print("Global targets:")
            for target in result.global_targets:
                console.print(f"  - {target.kind} ({format_size(target.size_bytes)})")
    console.print()


def show_clean_outcome(outcome: CleanOutcome, verbose: bool = False) -> None:
    """Display the result of a clean."""
    console.print()
    if outcome.success:
        console.print("[bold green]Cleaning complete![/bold green]")
    else:
        console.print("[bold yellow]Cleaning finished with errors[/bold yellow]")

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Deleted", f"{outcome.deleted_count} targets")
    if outcome.failed_count:
        table.add_row("[red]Failed[/red]", f"{outcome.failed_count} targets")
    else:
        table.add_row("Failed", "0 targets")
    table.add_row("Reclaimed", f"[bold green]{format_size(outcome.reclaimed_bytes)}[/bold green]")
    console.print(table)

    if outcome.failed_paths:
        err_console.print("[red]Failed deletions:[/red]")
        for path, reason in outcome.failed_paths.items():
            err_console.print(f"  {path}: {reason}", highlight=False)

    if verbose and outcome.deleted_paths:
        console.print("Deleted paths:")
        for path in sorted(outcome.deleted_paths):
            console.print(f"  - {path}", highlight=False)


def show_doctor_report(info: dict) -> None:
    """Display environment information."""
    console.print()
    console.print("[bold]Flutter Cache Cleaner - Environment Information[/bold]")

    console.print("\n[bold]Platform:[/bold]")
    console.print(f"  OS: {info['platform']}")
    console.print(f"  Version: {info['operatingSystemVersion']}")
    console.print(f"  Home: {info['homeDirectory']}", highlight=False)

    console.print("\n[bold]Tooling:[/bold]")
    console.print(f"  Flutter: {info['flutterVersion']}")
    console.print(f"  Dart: {info['dartVersion']}")

    console.print("\n[bold]Global Cache Locations:[/bold]")
    caches = info["cacheLocations"]
    for key, label in [
        ("pubCache", "Pub Cache"),
        ("gradleCache", "Gradle Cache"),
        ("xcodeDerivedData", "Xcode DerivedData"),
        ("cocoaPodsCache", "CocoaPods Cache"),
    ]:
        console.print(f"  {label}: {caches[key]}", highlight=False)
        size = caches.get(f"{key}Size")
        if size is not None:
            console.print(f"    Size: {format_size(size)}")

    console.print("\n[bold]Default Scan Roots:[/bold]")
    roots = info["defaultScanRoots"]
    if not roots:
        console.print("  None found")
    for root in roots:
        console.print(f"  - {root}", highlight=False)
    console.print()


def confirm_action(message: str) -> bool:
    """
    Ask for confirmation on stderr, keeping stdout free for JSON.

    Returns:
        True if confirmed; False if declined or stdin is closed
    """
    from rich.prompt import Confirm

    try:
        return Confirm.ask(message, console=err_console)
    except EOFError:
        return False
