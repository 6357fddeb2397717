"""Mini README: Logging helpers shared by the wallet ledger modules.

Structure:
    * configure_root_logger - installs the single console handler.
    * get_logger - module logger factory used as ``LOGGER = get_logger(__name__)``.

Configuration happens once per process; later calls only adjust the level
when one is passed explicitly, so the CLI can honour ``WALLET_LOG_LEVEL``
after library modules have already created their loggers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Attach the wallet console handler to the root logger."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level if level is not None else logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
