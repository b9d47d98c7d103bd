# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for aaparser output."""
from rich.console import Console

from aaparser.themes import get_one_theme

console = Console(color_system="truecolor", theme=get_one_theme())
