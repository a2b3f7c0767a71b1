"""Hygie: program generation and progression engine for coached training.

The engine lays out periodized multi-week programs, synthesizes session
workouts from an injected exercise catalog, and tracks completion and
phase gates. It owns no storage and no network surface.
"""

import hygie.core.logger  # noqa: F401  (configures loguru sinks)

__version__ = "0.1.0"
