"""
Root logger setup.
"""

from __future__ import annotations

import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Attach a console handler to the root logger and set its level.

    Does nothing if the root logger already has handlers (uvicorn or pytest
    may have configured it first).
    """
    root = logging.getLogger()
    if root.handlers:
        return None

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)
