"""Command line interface for Minimal JSON Diff."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from ._settings import settings
from .differ import make_patch
from .jsonpatch import JsonPatch
from .version import __version__

logger = logging.getLogger(__name__)

JsonFile = Annotated[
    Path,
    typer.Argument(exists=True, dir_okay=False, readable=True, help="A JSON file"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        dir_okay=False,
        writable=True,
        help="Write the result to this file instead of stdout",
    ),
]
IndentOption = Annotated[
    int | None,
    typer.Option("--indent", "-i", min=0, help="Indent the output JSON"),
]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _load(file: Path) -> Any:
    logger.info("Reading %s", file)
    try:
        return json.loads(
            file.read_text(encoding="utf-8"), parse_constant=_reject_constant
        )
    except (OSError, ValueError) as e:
        typer.secho(f"Cannot read {file}: {e}", err=True, fg="red")
        raise typer.Exit(2) from e


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
    else:
        logger.info("Writing %s", output)
        output.write_text(text + "\n", encoding="utf-8")


app = typer.Typer(help="Compute and apply minimal JSON Patch documents.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--quiet", "-v/-q", help="Log debug information"),
    ] = False,
    version: Annotated[
        bool, typer.Option("--version", is_eager=True, help="Print the app version")
    ] = False,
):
    """Compute and apply minimal JSON Patch documents."""
    if version:
        typer.echo(f"minimal-json-diff v{__version__}")
        raise typer.Exit()
    logging.basicConfig(
        filename=settings.log_file,
        level=logging.DEBUG if verbose else settings.log_level,
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("diff")
def diff_command(
    source: JsonFile,
    target: JsonFile,
    output: OutputOption = None,
    indent: IndentOption = None,
):
    """Print the JSON Patch that turns SOURCE into TARGET.

    Exits with 0 when the documents are equal and 1 when they differ.
    """
    patch = make_patch(_load(source), _load(target))
    _emit(
        patch.to_json(
            indent=settings.indent if indent is None else indent,
            ensure_ascii=settings.ensure_ascii,
        ),
        output,
    )
    if len(patch):
        raise typer.Exit(1)


@app.command("apply")
def apply_command(
    document: JsonFile,
    patch_file: Annotated[
        Path,
        typer.Argument(
            exists=True, dir_okay=False, readable=True, help="A JSON Patch file"
        ),
    ],
    output: OutputOption = None,
    indent: IndentOption = None,
):
    """Apply the JSON Patch in PATCH_FILE to DOCUMENT and print the result."""
    data = _load(document)
    try:
        patch = JsonPatch.from_json(patch_file.read_bytes())
    except ValidationError as e:
        typer.secho(f"Invalid patch {patch_file}: {e}", err=True, fg="red")
        raise typer.Exit(2) from e
    try:
        result = patch.apply(data)
    except (AssertionError, KeyError, IndexError, ValueError, TypeError) as e:
        typer.secho(f"Cannot apply patch: {e}", err=True, fg="red")
        raise typer.Exit(1) from e
    _emit(
        json.dumps(
            result,
            indent=settings.indent if indent is None else indent,
            ensure_ascii=settings.ensure_ascii,
        ),
        output,
    )


if __name__ == "__main__":
    app()
