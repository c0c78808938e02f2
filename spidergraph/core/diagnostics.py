"""Tagged console diagnostics shared by the engine, the renderer and the view."""

from __future__ import annotations

import sys

DEBUG_MARKER = "[SpiderGraph][DEBUG]"
WARN_MARKER = "[SpiderGraph][WARN]"

__all__ = ["DEBUG_MARKER", "WARN_MARKER", "debug", "warn"]


def debug(message: str) -> None:
    print(f"{DEBUG_MARKER} {message}", flush=True)


def warn(message: str) -> None:
    print(f"{WARN_MARKER} {message}", file=sys.stderr, flush=True)
