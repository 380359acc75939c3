"""
Logging configuration.

``setup_logging`` attaches a single console handler to the root logger.
Every module logs through ``logging.getLogger(__name__)``.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once.

    Calling it again (tests, repeated ``create_app``) is a no-op as long as
    the root logger already has handlers.

    Args:
        level: Logging level name, case insensitive (e.g. "DEBUG", "info")
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
