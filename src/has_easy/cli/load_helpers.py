from __future__ import annotations

"""Shared helpers for loading collection files with CLI-friendly errors."""

import importlib
from pathlib import Path
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console

from has_easy.io.loaders import LoaderError

T = TypeVar("T")


def load_or_exit(
    loader_fn: Callable[..., T],
    *args: Any,
    console: Console,
    verbose_errors: bool = False,
    **kwargs: Any,
) -> T:
    if args:
        first = args[0]
        if isinstance(first, str) and not Path(first).exists():
            console.print(f"[red]Path not found:[/red] {first}")
            raise typer.Exit(code=1)
    try:
        return loader_fn(*args, **kwargs)
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load collections:[/red] {err.message}\n{err.cause}")
        else:
            console.print(f"[red]Failed to load collections:[/red] {err}")
        raise typer.Exit(code=1)


def import_host_or_exit(ref: str, *, console: Console) -> type:
    """Import a host class given as ``package.module:ClassName``."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        console.print(f"[red]Bad --host[/red] (expected module:ClassName): {ref}")
        raise typer.Exit(code=2)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        console.print(f"[red]Cannot import[/red] {module_name}: {exc}")
        raise typer.Exit(code=2)
    host_cls = getattr(module, attr, None)
    if not isinstance(host_cls, type):
        console.print(f"[red]No class[/red] {attr} in {module_name}")
        raise typer.Exit(code=2)
    return host_cls


__all__ = ["import_host_or_exit", "load_or_exit"]
