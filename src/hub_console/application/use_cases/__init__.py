"""Use cases: filtering, formatting, control and polling of the console."""

from __future__ import annotations

from .controller import InteractiveController
from .filtering import passes
from .formatting import LineFormatter, ValueRenderer
from .render_event import create_render_log_event
from .stats import StatsPoller

__all__ = [
    "InteractiveController",
    "LineFormatter",
    "StatsPoller",
    "ValueRenderer",
    "create_render_log_event",
    "passes",
]
