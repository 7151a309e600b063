"""Interactive terminal runtime: input, frame composition and the event loop."""

from __future__ import annotations

from .app import render_once, run_browser

__all__ = ["render_once", "run_browser"]
