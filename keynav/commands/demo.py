"""Interactive Textual demo command."""

from pathlib import Path
from typing import Optional

import typer

from keynav.config.settings import load_settings
from keynav.exceptions import KeynavError
from keynav.services.layout_loader import load_layout
from keynav.utils.output import console


DEMO_LAYOUT = {
    "paths": ["/", "/details"],
    "regions": [
        {
            "id": "sidebar",
            "priority": 1,
            "zones": [
                {"id": "menu", "type": "vertical", "items": ["Home", "Library", "Store", "Settings"]},
            ],
        },
        {
            "id": "main",
            "priority": 0,
            "default_zone": "featured",
            "zones": [
                {"id": "featured", "type": "horizontal", "items": ["Hero", "News", "Sale"]},
                {"id": "library", "type": "grid", "columns": 3, "memory": True, "items": 7},
                {"id": "footer", "type": "horizontal", "items": ["About", "Help"]},
            ],
        },
    ],
}


def demo(
    layout: Optional[Path] = typer.Argument(None, help="Layout YAML file (built-in demo if omitted)"),
    vim_keys: bool = typer.Option(False, "--vim", help="Also accept h/j/k/l"),
):
    """Open an interactive TUI to try keyboard navigation over a layout."""
    from keynav.ui.textual_bindings import NavigationApp

    try:
        settings = load_settings()
        data = load_layout(layout) if layout else DEMO_LAYOUT
    except KeynavError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    NavigationApp(data, settings=settings, vim_keys=vim_keys).run()
