"""Shared logging helpers for bankdedupe."""

from __future__ import annotations

import logging


def configure_logging(*, level: int | str = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger once.

    Parameters mirror ``logging.basicConfig``: the level accepts a number or a
    level name such as ``"INFO"``. Pass ``force=True`` to reconfigure during
    tests or from a second entry point.
    """

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
