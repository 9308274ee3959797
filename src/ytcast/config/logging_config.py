"""
Logging setup for the ytcast command line.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the ``ytcast`` logger.

    Calling this more than once does not add duplicate handlers.

    Parameters
    ----------
    level : str
        Level name, e.g. ``"INFO"`` or ``"DEBUG"``.

    Returns
    -------
    logging.Logger
        The configured ``ytcast`` logger.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger("ytcast")
    root_logger.setLevel(log_level)

    if not any(getattr(h, "_ytcast_console", False) for h in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        )
        console_handler._ytcast_console = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    for handler in root_logger.handlers:
        handler.setLevel(log_level)

    return root_logger
