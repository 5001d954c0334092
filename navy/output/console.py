from rich.console import Console

CONSOLE = Console(highlight=False)
ERROR_CONSOLE = Console(stderr=True, highlight=False)
