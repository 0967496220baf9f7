import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level="WARNING", console: Console = None) -> None:
    """
    Routes the ``candor`` loggers through rich on stderr.
    Only the CLI calls this; library code just logs.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = RichHandler(console=console or Console(stderr=True),
                          show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s => %(message)s"))

    root = logging.getLogger("candor")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
