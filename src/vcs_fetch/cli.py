"""Command-line interface for vcs-fetch."""

import logging
import sys
from pathlib import Path

import typer
from rich.logging import RichHandler

from vcs_fetch import __version__
from vcs_fetch.config import ConfigurationError, VcsFetchConfig
from vcs_fetch.ui import console, make_confirm
from vcs_fetch.vcs import CloneRequest, VCSError, VCSRegistry, VCSType
from vcs_fetch.vcs.workdir import working_directory

app = typer.Typer(
    name="vcs-fetch",
    help="Clone and update library checkouts from Git or Mercurial repositories",
    add_completion=False,
)

# Help text constants
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.vcsfetch or .env)"
YES_HELP = "Discard local changes without asking"


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def build_registry(config: VcsFetchConfig) -> VCSRegistry:
    """Create and initialize the VCS registry from configuration.

    Args:
        config: Configuration object

    Returns:
        Initialized registry
    """
    registry = VCSRegistry(
        settings=config.to_vcs_settings(),
        confirm=make_confirm(always_yes=config.always_yes, never=config.never),
        console=console,
        executables=config.executables,
    )
    registry.initialize()
    return registry


def load_config(env_file: str | None, yes: bool) -> VcsFetchConfig:
    """Load configuration, applying command-line overrides.

    Args:
        env_file: Optional custom env file
        yes: Whether --yes was given

    Returns:
        Loaded configuration
    """
    config = VcsFetchConfig(env_file=env_file)
    if yes:
        config.always_yes = True
        config.never = False
    return config


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        console.print(f"vcs-fetch {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Clone and update library checkouts."""


@app.command()
def clone(
    library: Path = typer.Argument(..., help="Library directory; the checkout is created in <library>/<vcs>"),
    url: str = typer.Argument(..., help="Repository URL or local path"),
    vcs: VCSType = typer.Option(VCSType.GIT, "--vcs", help="Version control system"),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Branch to check out"),
    rev: str | None = typer.Option(None, "--rev", "-r", help="Tag or revision to check out"),
    flat: bool = typer.Option(False, "--flat", help="Do not fetch nested sub-repositories"),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Clone a library repository."""
    setup_logging(verbose)

    try:
        config = load_config(env_file, yes=False)
        if flat:
            config.flat = True
        registry = build_registry(config)

        client = registry.get(vcs)
        if client is None:
            console.print(f"[red]No client registered for {vcs.display_name}[/red]")
            sys.exit(1)
        client.require_available()

        request = CloneRequest(
            destination=library / client.directory,
            source=url,
            branch=branch,
            version=rev,
            settings=config.to_vcs_settings(),
        )
        library.mkdir(parents=True, exist_ok=True)
        client.clone(
            request.destination,
            request.source,
            branch=request.branch,
            version=request.version,
            settings=request.settings,
        )
        console.print(f"[green]Cloned {request.source} into {request.destination}[/green]")

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except VCSError as e:
        console.print(str(e), markup=False, style="red")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def update(
    library: Path = typer.Argument(..., help="Library directory containing a git/ or hg/ checkout"),
    vcs: VCSType | None = typer.Option(None, "--vcs", help="Version control system (default: auto-detect)"),
    yes: bool = typer.Option(False, "--yes", "-y", help=YES_HELP),
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Update a library checkout to the latest upstream state."""
    setup_logging(verbose)

    try:
        config = load_config(env_file, yes=yes)
        registry = build_registry(config)

        client = registry.get(vcs) if vcs else registry.detect_from_directory(library)
        if client is None:
            console.print(f"[red]No git or hg checkout found in {library}[/red]")
            sys.exit(1)
        client.require_available()

        checkout = library / client.directory
        with working_directory(checkout):
            changed = client.update(library.resolve().name)

        if changed:
            console.print(f"[green]Updated {library.name}[/green]")
        else:
            console.print(f"{library.name} is already up to date")

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except VCSError as e:
        console.print(str(e), markup=False, style="red")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def check(
    env_file: str | None = typer.Option(None, "--env-file", help=ENV_FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_OUTPUT_HELP),
) -> None:
    """Show which version control clients are available."""
    setup_logging(verbose)

    try:
        registry = build_registry(load_config(env_file, yes=False))
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    missing = False
    for client in registry:
        if client.available:
            console.print(f"  [green]✓[/green] {client.name} ({client.executable})")
        else:
            missing = True
            console.print(f"  [red]✗[/red] {client.name} ({client.executable}) not found")

    if missing:
        sys.exit(1)


if __name__ == "__main__":
    app()
