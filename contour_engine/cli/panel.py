"""CLI commands that drive the engine: analyze, command search and the timer."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from contour_engine.bootstrap import build_default_engine
from contour_engine.core.intents import PanelMode
from contour_engine.core.models import PanelState, TimerState, to_jsonable
from contour_engine.services.commands import group_by_category
from contour_engine.services.detectors.timer import parse_duration
from contour_engine.services.orchestrator import ContourEngine, get_module_copy_value
from contour_engine.services.scheduling import AsyncioScheduler

console = Console()

EngineFactory = Callable[[], ContourEngine]


def _default_engine() -> ContourEngine:
    engine, _ = build_default_engine(scheduler=AsyncioScheduler())
    return engine


# Replaced in tests to run against in-memory adapters.
engine_factory: EngineFactory = _default_engine


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _render_state(state: PanelState) -> None:
    if state.mode is PanelMode.HIDDEN or state.active_module is None:
        console.print("[dim]No intent detected.[/dim]")
        return
    module = state.active_module
    table = Table(title=f"{module.intent.value}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    payload = to_jsonable(module.result) if module.result is not None else {}
    for key, value in payload.items():
        if key == "intent" or value is None:
            continue
        table.add_row(key, _cell(value))
    console.print(table)
    copy_value = get_module_copy_value(module)
    if copy_value:
        console.print(f"[bold]Enter copies:[/bold] {copy_value}")


async def _analyze(text: str) -> PanelState:
    engine = engine_factory()
    engine.analyze(text)
    await engine.wait_for_resolution()
    return engine.state


def analyze(
    text: str = typer.Argument(..., help="Input text as typed into the chat box"),
    as_json: bool = typer.Option(False, "--json", help="Print the panel state as JSON"),
) -> None:
    """Detect the intent of TEXT and print the resolved module result."""
    state = asyncio.run(_analyze(text))
    if as_json:
        console.print_json(json.dumps(to_jsonable(state), ensure_ascii=False))
        return
    if state.mode is PanelMode.COMMANDS:
        _print_commands(state)
        return
    _render_state(state)


def _print_commands(state: PanelState) -> None:
    if not state.commands:
        console.print("[dim]No matching commands.[/dim]")
        return
    for group in group_by_category(state.commands):
        table = Table(title=group.label, show_header=False)
        table.add_column("Command", style="bold")
        table.add_column("Description")
        for command in group.commands:
            table.add_row(f"/{command.id}", command.description)
        console.print(table)


def commands(query: Optional[str] = typer.Argument(None, help="Fuzzy search query")) -> None:
    """List slash commands, optionally filtered by QUERY; recents come first without one."""
    state = engine_factory().analyze("/" + (query or "").strip())
    _print_commands(state)


async def _run_timer(seconds: int) -> TimerState:
    engine = engine_factory()
    done = asyncio.Event()
    last: dict[str, TimerState] = {}

    def on_change(state: PanelState) -> None:
        module = state.active_module
        if module is None or not isinstance(module.result, TimerState):
            return
        timer = module.result
        if last.get("timer") is not None and last["timer"].display != timer.display:
            console.print(f"{timer.display}  ({timer.progress:.0%})")
        last["timer"] = timer
        if timer.is_complete:
            done.set()

    unsubscribe = engine.subscribe(on_change)
    engine.focus_on_module("timer")
    engine.set_timer_duration(seconds)
    engine.start_timer()
    try:
        await done.wait()
    finally:
        unsubscribe()
        engine.dismiss()
    return last["timer"]


def timer(duration: str = typer.Argument(..., help='Duration such as "5m", "1h30m" or "10:00"')) -> None:
    """Run a countdown timer in the terminal."""
    seconds = parse_duration(duration)
    if seconds is None:
        console.print(f"[red]Error:[/red] cannot parse duration '{duration}'")
        raise typer.Exit(1)
    final = asyncio.run(_run_timer(seconds))
    console.print(f"[green]{final.label} timer complete![/green]")


__all__ = ["analyze", "commands", "engine_factory", "timer"]
