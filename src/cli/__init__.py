"""keybasectl command line (typer + rich)."""
