"""Settings inspection command."""

import typer
from rich.table import Table

from keynav.config.settings import get_env_info, get_settings_path, load_settings
from keynav.exceptions import ConfigurationError
from keynav.utils.output import console, print_json



def config(
    env: bool = typer.Option(False, "--env", "-e", help="Show KEYNAV_* environment variables"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Show the effective navigation settings."""
    if env:
        info = get_env_info()
        if json_output:
            print_json(info)
            return

        table = Table(title="Environment")
        table.add_column("Variable", style="cyan")
        table.add_column("Value")
        table.add_column("Default", style="dim")
        table.add_column("Description")
        for name, details in info.items():
            value = details["value"] if details["is_set"] else "[dim]unset[/dim]"
            if not details["valid"]:
                value = f"[red]{details['value']} (invalid)[/red]"
            table.add_row(name, value, str(details["default"]), details["description"])
        console.print(table)
        return

    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        print_json({"path": str(get_settings_path()), "settings": settings.to_dict()})
        return

    table = Table(title=f"Settings ({get_settings_path()})", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
