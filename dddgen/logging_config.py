"""Logging setup for dddgen.

Every module obtains its logger through :func:`get_logger` so that all
output sits under the ``dddgen`` namespace and is rendered by a single
rich handler installed by :func:`setup_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "dddgen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``dddgen`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """Install the rich handler on the package logger once.

    Args:
        level: Log level name used when not verbose.
        verbose: Force DEBUG level and show file paths in records.

    Returns:
        The configured package logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING))

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True

    return root
