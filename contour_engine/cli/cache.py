"""CLI commands for inspecting and clearing the resolution caches."""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from contour_engine.adapters.kv_store import TinyDBKeyValueStore
from contour_engine.core.config import settings
from contour_engine.core.ports import PersistentKV
from contour_engine.services.cache_manager import CacheManager, build_cache_manager

app = typer.Typer(name="cache", help="Inspect and clear resolution caches")
console = Console()


def _open_kv() -> PersistentKV:
    return TinyDBKeyValueStore(settings.CONTOUR_DATA_DIR / settings.CONTOUR_KV_FILENAME)


# Replaced in tests to run against an in-memory store.
kv_factory = _open_kv


def _get_manager() -> CacheManager:
    return build_cache_manager(kv_factory(), settings)


@app.command("stats")
def show_stats(as_json: bool = typer.Option(False, "--json", help="Print raw JSON")) -> None:
    """Show entry counts and hit rates for each cache."""
    stats = _get_manager().stats()
    if as_json:
        console.print_json(json.dumps(stats))
        return
    table = Table(title="Resolution caches")
    table.add_column("Name", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("TTL (s)", justify="right")
    table.add_column("Hits", justify="right")
    table.add_column("Misses", justify="right")
    for name, cache in stats["caches"].items():
        counters = cache["stats"]
        table.add_row(
            name,
            str(cache["entry_count"]),
            str(cache["ttl_seconds"]),
            str(counters.get("hits", 0)),
            str(counters.get("misses", 0)),
        )
    console.print(table)


@app.command("clear")
def clear(namespace: Optional[str] = typer.Argument(None, help="Cache to clear; all when omitted")) -> None:
    """Clear one cache or all of them."""
    manager = _get_manager()
    if namespace is None:
        manager.clear_all()
        console.print("[green]All caches cleared.[/green]")
        return
    try:
        manager.clear_cache(namespace)
    except KeyError as exc:
        names = ", ".join(manager.cache_names())
        console.print(f"[red]Error:[/red] unknown cache '{namespace}' (choose from {names})")
        raise typer.Exit(1) from exc
    console.print(f"[green]Cache '{namespace}' cleared.[/green]")


__all__ = ["app"]
