"""Rich renderables for the navigation state dump."""

from typing import Any, Dict, Iterable

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from keynav.models.navigation import HistoryEntry


def render_state_tree(state: Dict[str, Any]) -> Tree:
    """Regions and their zones as a tree, active entries highlighted."""
    tree = Tree("[bold]Navigation State[/bold]")

    for region in state["regions"]:
        style = "bold green" if region["is_active"] else ""
        label = Text(f"Region: {region['id']}", style=style)
        label.append(f"  priority={region['priority']}", style="dim")
        if region["persistent"]:
            label.append("  persistent", style="dim")
        branch = tree.add(label)

        if not region["zones"]:
            branch.add(Text("(no zones)", style="dim"))
        for zone in region["zones"]:
            zone_style = "bold cyan" if zone["is_active"] else ""
            zone_label = Text(f"Zone: {zone['id']}", style=zone_style)
            zone_label.append(f"  {zone['type']}  items={zone['items']}", style="dim")
            if zone["is_active"]:
                zone_label.append(f"  index={zone['active_index']}", style="cyan")
            if zone["memory"]:
                zone_label.append("  memory", style="magenta")
            branch.add(zone_label)

    memory = state.get("memory")
    if memory:
        memory_branch = tree.add("[magenta]Memory[/magenta]")
        memory_branch.add(f"Path: {memory['path']}")
        memory_branch.add(f"Region: {memory['region']}")
        memory_branch.add(f"Zone: {memory['zone']}")
        memory_branch.add(f"Index: {memory['index']}")

    return tree


def render_state_table(state: Dict[str, Any]) -> Table:
    """Focus summary as a two-column table."""
    table = Table(title="Active State", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    error = state.get("last_error")
    table.add_row("Region", str(state["active_region"]))
    table.add_row("Zone", str(state["active_zone"]))
    table.add_row("Index", str(state["active_index"]))
    table.add_row("Error", f"{error['zone']}[{error['index']}]" if error else "-")
    table.add_row("Memory", state.get("memory_status", "idle"))
    table.add_row("History", str(state.get("history_size", 0)))
    return table


def render_history_table(history: Iterable[HistoryEntry], limit: int = 10) -> Table:
    """Most recent history entries, newest last."""
    entries = list(history)[-limit:]
    table = Table(title=f"History (last {len(entries)})")
    table.add_column("Region", style="green")
    table.add_column("Zone", style="cyan")
    table.add_column("Index", justify="right")
    for entry in entries:
        table.add_row(entry.region, entry.zone, str(entry.index))
    return table
