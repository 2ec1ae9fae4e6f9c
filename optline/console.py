# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instances for Optline output (help text, tables, errors)."""
from rich.console import Console

console = Console()
error_console = Console(stderr=True)
