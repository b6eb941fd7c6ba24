"""
has-easy CLI: check and inspect collection declarations written in YAML.
"""

from __future__ import annotations

import typer
from rich.console import Console

from has_easy.cli.formatters import build_collection_table
from has_easy.cli.load_helpers import import_host_or_exit, load_or_exit
from has_easy.core.registries.validators import SchemaValidator
from has_easy.io.loaders import load_collections

app = typer.Typer(help="has-easy CLI: validate and inspect attribute collection declarations.")
console = Console()


@app.command()
def validate(
    path: str = typer.Argument(..., help="YAML file or folder of collection declarations"),
    host: str | None = typer.Option(None, help="Host class to check method references against (module:ClassName)"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Validate collection declarations."""
    registry = load_or_exit(load_collections, path, console=console, verbose_errors=verbose)
    host_cls = import_host_or_exit(host, console=console) if host else None

    attr_count = sum(len(schema.definitions) for schema in registry.all())
    console.print(f"[green]OK[/green] Loaded {len(registry)} collection(s), {attr_count} attribute(s)")

    errors = SchemaValidator(registry, host_cls).validate_all()
    if errors:
        console.print("[red]Validation errors detected:[/red]")
        for error in errors:
            console.print(f" - {error}")
        raise typer.Exit(code=1)

    console.print("[green]All validations passed[/green]")


@app.command("show")
def show_collection(
    path: str = typer.Argument(..., help="YAML file or folder of collection declarations"),
    name: str = typer.Argument(..., help="Collection name"),
    verbose: bool = typer.Option(False, "--verbose-load", help="Display full validation trace on loader errors"),
) -> None:
    """Show the attributes of one collection."""
    registry = load_or_exit(load_collections, path, console=console, verbose_errors=verbose)

    try:
        schema = registry.get(name)
    except KeyError:
        console.print(f"[red]Collection not found[/red]: {name}")
        raise typer.Exit(code=2)

    console.print(f"[bold]{schema.name}[/bold] (Collection)")
    if schema.aliases:
        console.print(f"Aliases: {', '.join(schema.aliases)}")
    console.print(f"Attributes: {len(schema.definitions)}")
    console.print(build_collection_table(schema))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
