"""Command-line utilities for the structschema package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import get_version
from .config import GeneratorConfig, load_generator_config, resolve_target
from .errors import ConversionError
from .generator import Generator
from .registry import type_key

app = typer.Typer(help="JSON Schema generation from dataclasses")
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _parse_definition(raw: str) -> tuple[str, str]:
    name, sep, target = raw.partition("=")
    if not sep or not name or not target:
        raise typer.BadParameter(f"expected NAME=package.module:Name, got {raw!r}")
    return name, target


def _resolve(target: str) -> object:
    try:
        return resolve_target(target)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command()
def generate(
    target: Annotated[
        str | None, typer.Argument(help="Root type as package.module:Name.")
    ] = None,
    definition: Annotated[
        list[str] | None,
        typer.Option("--definition", "-d", help="Named definition as NAME=package.module:Name."),
    ] = None,
    schema: Annotated[str | None, typer.Option(help="Schema dialect URI.")] = None,
    config: Annotated[
        Path | None,
        typer.Option(exists=True, readable=True, help="YAML/JSON generation config."),
    ] = None,
    out: Annotated[Path | None, typer.Option(help="Output path (stdout if omitted).")] = None,
    indent: Annotated[int | None, typer.Option(min=0, help="JSON indent width.")] = None,
    verbose: Annotated[bool, typer.Option(help="Log debug details.")] = False,
) -> None:
    """Generate a JSON Schema for a dataclass."""
    _configure_logging(verbose)
    try:
        cfg = load_generator_config(config) if config else GeneratorConfig()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    updates: dict[str, object] = {}
    if target:
        updates["root"] = target
    if schema:
        updates["schema_uri"] = schema
    if indent is not None:
        updates["indent"] = indent
    if definition:
        updates["definitions"] = {**cfg.definitions, **dict(map(_parse_definition, definition))}
    cfg = cfg.model_copy(update=updates)
    if not cfg.root and not cfg.definitions:
        raise typer.BadParameter("provide a root target or at least one definition")

    try:
        generator = Generator.from_config(cfg)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        document = generator.generate()
    except ConversionError as exc:
        err_console.print(f"[red]Schema generation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    text = document.to_json(indent=cfg.indent)
    if out is None:
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n")
    console.print(f"[bold green]Schema written:[/] {out}")


@app.command()
def definitions(
    config: Annotated[Path, typer.Argument(exists=True, readable=True)],
) -> None:
    """List the definitions a generation config registers."""
    try:
        cfg = load_generator_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    table = Table(title=f"Definitions ({config})")
    table.add_column("Name")
    table.add_column("Target")
    table.add_column("Type key")
    for name, target in cfg.definitions.items():
        table.add_row(name, target, type_key(_resolve(target)))
    console.print(table)


def main() -> None:
    """Entry point for `python -m structschema.cli`."""
    app()


if __name__ == "__main__":
    main()
