"""Layout simulation and inspection commands."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.table import Table

from keynav.config.settings import load_settings
from keynav.exceptions import KeynavError
from keynav.services.layout_loader import apply_layout, load_layout
from keynav.services.navigation_store import NavigationStore
from keynav.services.router import PathRouter
from keynav.services.scheduler import ManualScheduler
from keynav.ui.keyboard import SELECT_KEYS, KeyboardController
from keynav.ui.state_view import render_history_table, render_state_table, render_state_tree
from keynav.utils.output import console, print_json


KEY_ALIASES = {"select": "enter"}


def build_store(layout_path: Path, start_path: str = "/") -> tuple:
    """Create a store on a manual clock and load a layout into it."""
    settings = load_settings()
    scheduler = ManualScheduler()
    store = NavigationStore(settings=settings, scheduler=scheduler, clock=scheduler.time)
    apply_layout(store, load_layout(layout_path))
    router = PathRouter(store, initial_path=start_path)
    return store, scheduler, router


def run_step(
    step: str,
    store: NavigationStore,
    scheduler: ManualScheduler,
    router: PathRouter,
    keyboard: KeyboardController,
) -> Dict[str, Any]:
    """
    Apply one simulation step.

    Steps are key names (up, down, left, right, select, enter, space,
    escape, tab) or commands: wait:<seconds>, route:<path>, save:<path>,
    restore:<path>.
    """
    command, _, argument = step.partition(":")
    if command == "wait" and argument:
        try:
            seconds = float(argument)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid wait duration: {argument}") from e
        result = scheduler.advance(seconds) > 0
    elif command == "route" and argument:
        result = router.navigate(argument)
    elif command == "save" and argument:
        result = store.save_state(argument)
    elif command == "restore" and argument:
        result = store.restore_state(argument)
    else:
        key = KEY_ALIASES.get(step, step)
        if key in keyboard.directions:
            result = keyboard.navigate(keyboard.directions[key])
        elif key in SELECT_KEYS:
            result = store.handle_select()
        elif keyboard.handle_key(key):
            result = None
        else:
            raise typer.BadParameter(f"Unknown step: {step}")

    return {
        "step": step,
        "result": result,
        "zone": store.state.active_zone,
        "index": store.active_index,
    }


def simulate(
    layout: Path = typer.Argument(..., help="Layout YAML file"),
    steps: Optional[List[str]] = typer.Argument(None, help="Keys or commands to apply"),
    path: str = typer.Option("/", "--path", "-p", help="Starting route path"),
    vim_keys: bool = typer.Option(False, "--vim", help="Also accept h/j/k/l"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """
    Replay key presses against a layout and show where focus ends up.

    [bold]Examples:[/bold]

        [cyan]keynav simulate layout.yaml right right down select[/cyan]
        [cyan]keynav simulate layout.yaml down route:/details route:/ wait:0.5[/cyan]
    """
    try:
        store, scheduler, router = build_store(layout, start_path=path)
    except KeynavError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    keyboard = KeyboardController(store, vim_keys=vim_keys)
    moves = [run_step(step, store, scheduler, router, keyboard) for step in steps or []]

    if json_output:
        print_json(
            {
                "path": router.current_path,
                "moves": moves,
                "state": store.describe_state(),
                "history": [
                    {"region": e.region, "zone": e.zone, "index": e.index} for e in store.history
                ],
            }
        )
        return

    if moves:
        table = Table(title="Steps")
        table.add_column("Step", style="bold")
        table.add_column("Result")
        table.add_column("Zone", style="cyan")
        table.add_column("Index", justify="right")
        for move in moves:
            outcome = move["result"]
            mark = "-" if outcome is None else ("[green]ok[/green]" if outcome else "[red]no[/red]")
            table.add_row(move["step"], mark, str(move["zone"]), str(move["index"]))
        console.print(table)

    console.print(render_state_table(store.describe_state()))
    console.print(render_history_table(store.history))


def inspect(
    layout: Path = typer.Argument(..., help="Layout YAML file"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show the regions and zones a layout registers."""
    try:
        store, _, _ = build_store(layout)
    except KeynavError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    problems = store.registry.check_consistency()
    if json_output:
        print_json({"state": store.describe_state(), "problems": problems})
        return

    console.print(render_state_tree(store.describe_state()))
    for problem in problems:
        console.print(f"[yellow]⚠ {problem}[/yellow]")
