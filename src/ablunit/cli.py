import json
import logging

from dataclasses import asdict
from pathlib import Path
from rich.console import Console
from typing import Optional

import typer

from ablunit import __version__
from ablunit.config import load_discovery_config
from ablunit.discover import discover_file, discover_tests, read_source
from ablunit.models import LocatedEntity
from ablunit.parsers.abl_parser import find_asserts
from ablunit.repository import RepositoryNotFoundError, find_repository_root

app = typer.Typer(
    help="ablunit - discover ABLUnit tests in OpenEdge ABL sources",
    no_args_is_help=True,
)

console = Console()


def _to_json(entities: list[LocatedEntity]) -> str:
    return json.dumps([asdict(entity) for entity in entities], indent=2)


@app.command()
def discover(root: Optional[Path] = typer.Argument(None, help="Repository root (auto-detected if omitted)")):
    """Discover test suites, classes, methods and procedures in a repository.

    Args:
        root: Directory to scan; defaults to the enclosing git repository
    """
    try:
        if root is None:
            root = find_repository_root(Path.cwd())
        entities = discover_tests(root, load_discovery_config(root))
    except RepositoryNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(_to_json(entities))


@app.command()
def scan(file_path: str):
    """Discover the tests declared in a single .cls or .p file.

    Args:
        file_path: Path to the file, absolute or relative to the repository root

    Examples:
        ablunit scan src/test/CustomerTest.cls
    """
    try:
        entities = discover_file(file_path)
    except (FileNotFoundError, ValueError, RepositoryNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(_to_json(entities))


@app.command()
def asserts(file_path: Path):
    """List OpenEdge.Core.Assert call sites in a file."""
    try:
        source_code = read_source(file_path)
    except (OSError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    calls = find_asserts(source_code)
    typer.echo(json.dumps([asdict(call) for call in calls], indent=2))


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"ablunit version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log discovery details to stderr"),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
