"""CLI interface for flutter-cache-cleaner."""

import logging
from typing import List, Optional

import typer

from flutter_cleaner import __version__
from flutter_cleaner.cleaner import CacheCleaner
from flutter_cleaner.config import (
    PROFILES,
    Config,
    ConfigError,
    delete_config,
    get_config_path,
    load_config,
    save_config,
)
from flutter_cleaner.display import (
    clean_outcome_to_json,
    configure,
    confirm_action,
    console,
    print_json,
    scan_result_to_json,
    show_clean_outcome,
    show_clean_summary,
    show_doctor_report,
    show_error,
    show_scan_result,
)
from flutter_cleaner.doctor import gather_info
from flutter_cleaner.models import CleanOutcome, ScanResult
from flutter_cleaner.observer import LoggingObserver
from flutter_cleaner.scanner import scan as run_scan

app = typer.Typer(
    name="flutter-cleaner",
    help="Find and safely clean Flutter build and dependency caches",
    add_completion=False,
    no_args_is_help=True,
)


class Options:
    """Global flags shared by every command."""

    def __init__(self, verbose: int = 0, quiet: bool = False, json_output: bool = False) -> None:
        self.verbose = verbose
        self.quiet = quiet
        self.json_output = json_output


def _setup_logging(verbosity: int, quiet: bool) -> None:
    level = logging.WARNING
    if quiet:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"flutter-cleaner version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Verbose output (-vv for debug)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """flutter-cleaner - reclaim disk space from Flutter caches."""
    _setup_logging(verbose, quiet)
    configure(quiet=quiet, color=not no_color)
    ctx.obj = Options(verbose=verbose, quiet=quiet, json_output=json_output)


def _options(ctx: typer.Context) -> Options:
    return ctx.obj if isinstance(ctx.obj, Options) else Options()


def _scan(
    opts: Options,
    roots: List[str],
    include_defaults: bool,
    optional: bool,
    include_global: bool,
    depth: int,
    profile: Optional[str],
) -> ScanResult:
    """Resolve config and profile, then run a scan. Exits on bad input."""
    config = load_config()

    if not roots and config and config.preferred_roots:
        roots = list(config.preferred_roots)

    if not roots and not include_defaults:
        show_error("Error: No scan roots specified. Use --root or --include-defaults")
        raise typer.Exit(1)

    kinds = None
    if profile:
        try:
            config = Config.from_profile(profile)
        except ConfigError as e:
            show_error(f"Error: {e}")
            raise typer.Exit(1)
    if config and config.target_kinds():
        kinds = config.target_kinds()
        optional = optional or config.needs_optional_targets()

    observer = LoggingObserver() if opts.verbose else None
    return run_scan(
        priority_roots=roots,
        include_defaults=include_defaults,
        include_optional=optional,
        include_global=include_global,
        max_depth=depth,
        kinds=kinds,
        observer=observer,
    )


@app.command()
def scan(
    ctx: typer.Context,
    root: List[str] = typer.Option([], "--root", "-r", help="Root directory to scan (repeatable)"),
    include_defaults: bool = typer.Option(
        False,
        "--include-defaults/--no-defaults",
        help="Include default scan roots (~/Developer, ~/Projects, ~/Documents)",
    ),
    optional: bool = typer.Option(
        False, "--optional", "-o", help="Include optional targets (.idea, .gradle, Pods, .symlinks)"
    ),
    include_global: bool = typer.Option(
        False, "--global", "-g", help="Include global caches (pub, Gradle, Xcode, CocoaPods)"
    ),
    depth: int = typer.Option(0, "--depth", "-d", min=0, help="Maximum recursion depth (0 = unlimited)"),
    profile: Optional[str] = typer.Option(
        None, "--profile", help=f"Target profile ({', '.join(PROFILES)})"
    ),
) -> None:
    """Scan for Flutter projects and cache files."""
    opts = _options(ctx)
    result = _scan(opts, root, include_defaults, optional, include_global, depth, profile)

    if opts.json_output:
        print_json(scan_result_to_json(result))
    else:
        show_scan_result(result, verbose=bool(opts.verbose))


@app.command()
def clean(
    ctx: typer.Context,
    root: List[str] = typer.Option([], "--root", "-r", help="Root directory to scan (repeatable)"),
    include_defaults: bool = typer.Option(
        False,
        "--include-defaults/--no-defaults",
        help="Include default scan roots (~/Developer, ~/Projects, ~/Documents)",
    ),
    optional: bool = typer.Option(
        False, "--optional", "-o", help="Include optional targets (.idea, .gradle, Pods, .symlinks)"
    ),
    include_global: bool = typer.Option(
        False, "--global", "-g", help="Include global caches (pub, Gradle, Xcode, CocoaPods)"
    ),
    depth: int = typer.Option(0, "--depth", "-d", min=0, help="Maximum recursion depth (0 = unlimited)"),
    profile: Optional[str] = typer.Option(
        None, "--profile", help=f"Target profile ({', '.join(PROFILES)})"
    ),
    apply: bool = typer.Option(False, "--apply", "-a", help="Actually perform deletions (required)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompts"),
    trash: bool = typer.Option(False, "--trash", help="Move to trash instead of deleting directly"),
) -> None:
    """Clean Flutter project and global caches."""
    opts = _options(ctx)

    if not apply:
        show_error("Error: --apply flag is required to perform deletions. This is a safety measure.")
        show_error("Run with --apply to actually delete files.")
        raise typer.Exit(1)

    result = _scan(opts, root, include_defaults, optional, include_global, depth, profile)

    if not result.all_targets:
        if opts.json_output:
            print_json(clean_outcome_to_json(CleanOutcome()))
        else:
            console.print("No cache files found to clean.")
        raise typer.Exit(0)

    if not opts.json_output:
        show_clean_summary(result, verbose=bool(opts.verbose))

    if not yes:
        if not confirm_action("Do you want to proceed with deletion?"):
            if opts.json_output:
                print_json(clean_outcome_to_json(CleanOutcome()))
            else:
                console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    if not opts.json_output:
        console.print("[bold]Cleaning caches...[/bold]")
    observer = LoggingObserver() if opts.verbose else None
    cleaner = CacheCleaner(move_to_trash=trash, observer=observer)
    outcome = cleaner.clean_scan_result(result)

    if opts.json_output:
        print_json(clean_outcome_to_json(outcome))
    else:
        show_clean_outcome(outcome, verbose=bool(opts.verbose))

    if not outcome.success:
        raise typer.Exit(1)


@app.command()
def doctor(ctx: typer.Context) -> None:
    """Show environment and cache location information."""
    opts = _options(ctx)
    info = gather_info()

    if opts.json_output:
        print_json(info)
    else:
        show_doctor_report(info)


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(False, "--show", help="Show the current configuration"),
    profile: Optional[str] = typer.Option(
        None, "--profile", help=f"Set the default profile ({', '.join(PROFILES)})"
    ),
    add_root: List[str] = typer.Option([], "--add-root", help="Add a preferred scan root"),
    reset: bool = typer.Option(False, "--reset", help="Delete the configuration file"),
) -> None:
    """Show or edit the configuration file."""
    opts = _options(ctx)

    if reset:
        delete_config()
        console.print("Configuration reset.")
        return

    current = load_config() or Config()

    if profile or add_root:
        try:
            if profile:
                from_profile = Config.from_profile(profile)
                current.profile = from_profile.profile
                current.default_targets = from_profile.default_targets
            for new_root in add_root:
                if new_root not in current.preferred_roots:
                    current.preferred_roots.append(new_root)
            path = save_config(current)
        except ConfigError as e:
            show_error(f"Error: {e}")
            raise typer.Exit(1)
        console.print(f"Configuration saved to {path}", highlight=False)
        show = True

    if show or not (profile or add_root):
        if opts.json_output:
            print_json(current.to_json())
            return
        try:
            console.print(f"[bold]Config file:[/bold] {get_config_path()}", highlight=False)
        except ConfigError as e:
            show_error(f"Error: {e}")
            raise typer.Exit(1)
        console.print(f"  Profile: {current.profile or 'none'}")
        targets = ", ".join(k.value for k in current.default_targets) or "all"
        console.print(f"  Targets: {targets}")
        roots = ", ".join(current.preferred_roots) or "none"
        console.print(f"  Preferred roots: {roots}", highlight=False)


if __name__ == "__main__":
    app()
