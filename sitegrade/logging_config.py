import logging
from rich.console import Console
from rich.logging import RichHandler


def configure(level: str = "INFO") -> None:
    """Send sitegrade log records to stderr at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=False,
                show_path=False,
            )
        ],
    )
