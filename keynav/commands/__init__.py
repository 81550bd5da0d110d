"""CLI commands for keynav."""
