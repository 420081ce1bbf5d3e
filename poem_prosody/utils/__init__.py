"""Utility helpers shared across the :mod:`poem_prosody` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .syllables import estimate_stress_for_unknown_word, estimate_syllable_count
from .observability import (
    StructuredLoggerAdapter,
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    start_span,
)

__all__ = [
    "configure_logging",
    "estimate_stress_for_unknown_word",
    "estimate_syllable_count",
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "start_span",
]
