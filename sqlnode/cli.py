"""sqlnode CLI - run node invocations from YAML files.

The CLI plays the host: it loads credentials, parameters and items from a
file, runs the node and prints the resulting items as JSON.
"""

import asyncio
import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from typing_extensions import Annotated

from sqlnode import __version__
from sqlnode.core.node import SQLNode
from sqlnode.exceptions import SQLNodeError, ValidationError
from sqlnode.models.credentials import Credentials
from sqlnode.models.invocation import Invocation
from sqlnode.models.item import NodeItem
from sqlnode.utils.log import configure_logging
from sqlnode.utils.yaml_parser import load_invocation

app = typer.Typer(
    name="sqlnode",
    help="sqlnode - SQL operations for workflow hosts",
    add_completion=False,
)

InvocationPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the YAML invocation file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"sqlnode version {__version__}")
        raise typer.Exit()


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Report sqlnode errors on stderr and exit with status 1."""
    try:
        yield
    except ValidationError as e:
        typer.secho(f"Validation error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except SQLNodeError as e:
        typer.secho(f"Execution error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _load(path: Path) -> tuple[Invocation, Credentials]:
    invocation = load_invocation(path)
    if invocation.credentials is None:
        raise ValidationError(f"No credentials section in {path}")
    return invocation, invocation.credentials


def _dump_items(items: list[NodeItem]) -> str:
    return json.dumps([item.model_dump() for item in items], indent=2, default=str)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override SQLNODE_LOG_LEVEL"),
    ] = None,
) -> None:
    """sqlnode - execute queries, procedures, inserts and updates."""
    configure_logging(level=log_level)


@app.command()
def run(
    invocation_path: InvocationPath,
    continue_on_fail: Annotated[
        bool,
        typer.Option("--continue-on-fail", help="Return an error item instead of failing"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the statements without connecting"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write result items to this file"),
    ] = None,
) -> None:
    """Run the invocation's operation over its items."""
    node = SQLNode()

    with _exit_on_error():
        if dry_run:
            invocation = load_invocation(invocation_path)
            for statement in node.preview(invocation):
                typer.echo(statement.sql)
                typer.echo(f"  binds: {statement.binds!r}")
            return

        invocation, credentials = _load(invocation_path)
        if continue_on_fail:
            invocation.continue_on_fail = True
        items = asyncio.run(node.execute(invocation, credentials))

    rendered = _dump_items(items)
    if output:
        output.write_text(rendered + "\n")
        typer.echo(f"Wrote {len(items)} items to {output}")
    else:
        typer.echo(rendered)


@app.command("test-connection")
def test_connection(invocation_path: InvocationPath) -> None:
    """Check the credentials by opening and closing a connection."""
    with _exit_on_error():
        _, credentials = _load(invocation_path)

    result = asyncio.run(SQLNode().test_credentials(credentials))
    if result.status == "OK":
        typer.secho(f"✓ {result.message}", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(f"✗ {result.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def tables(
    invocation_path: InvocationPath,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="Only tables containing this text"),
    ] = None,
) -> None:
    """List the tables visible to the configured user."""
    with _exit_on_error():
        _, credentials = _load(invocation_path)
        options = asyncio.run(SQLNode().search_tables(credentials, filter=search))

    for option in options:
        typer.echo(option.name)


if __name__ == "__main__":
    app()
