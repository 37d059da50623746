# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Argfork output."""
from rich.console import Console
from rich.theme import Theme

ARGFORK_THEME = Theme(
    {
        "argfork.command": "bold cyan",
        "argfork.flag": "bold green",
        "argfork.argument": "yellow",
        "argfork.required": "bold red",
        "argfork.diagnostic": "dim yellow",
        "argfork.error": "bold red",
    }
)

console = Console(color_system="truecolor", theme=ARGFORK_THEME)
