"""Project-wide logging utilities for the benchmark layer.

The algorithms and validators never log; only `intsort.bench` does.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

from rich.logging import RichHandler

_ROOT = "intsort"
_LEVEL_ENV = "INTSORT_LOG_LEVEL"
_DEFAULT_LEVEL = "INFO"


def _env_level() -> Tuple[str, Optional[str]]:
    """Return (level, rejected value) from INTSORT_LOG_LEVEL; unknown names fall back to INFO."""
    raw = os.environ.get(_LEVEL_ENV, _DEFAULT_LEVEL)
    level = raw.strip().upper()
    # getLevelName maps known names to ints and anything else to "Level <name>"
    if isinstance(logging.getLevelName(level), int):
        return level, None
    return _DEFAULT_LEVEL, raw


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, markup=False))
        root.propagate = False
    level, rejected = _env_level()
    root.setLevel(level)
    if rejected is not None:
        root.warning("Ignoring %s=%r (not a logging level); using %s", _LEVEL_ENV, rejected, level)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return `intsort` or `intsort.<name>`, with the level from INTSORT_LOG_LEVEL."""

    root = _configure_root()
    if name is None:
        return root
    return logging.getLogger(f"{_ROOT}.{name}")
