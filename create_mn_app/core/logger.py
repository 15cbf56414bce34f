"""Console logging for create-mn-app.

Everything goes to the shared rich console; nothing is written to disk.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER = "create_mn_app"

_debug_enabled = False


def enable_debug(enabled: bool = True) -> None:
    """Switch every create_mn_app logger to DEBUG (or back to INFO)."""
    global _debug_enabled

    _debug_enabled = enabled
    level = logging.DEBUG if enabled else logging.INFO
    for name, candidate in logging.root.manager.loggerDict.items():
        if name.startswith(ROOT_LOGGER) and isinstance(candidate, logging.Logger):
            candidate.setLevel(level)
    logging.getLogger(ROOT_LOGGER).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger with Rich console handler
    """
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if _debug_enabled else logging.INFO)

    return logger
