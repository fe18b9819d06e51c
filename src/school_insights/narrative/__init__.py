"""Local narrative composition for regional school reports."""

from .composer import STATISTIC_KEYS, build_context, compose, display_name, school_type_label

__all__ = [
    "STATISTIC_KEYS",
    "build_context",
    "compose",
    "display_name",
    "school_type_label",
]
