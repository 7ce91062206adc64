"""Core package - exports request helpers."""

from .helpers import (
    require_param,
    parse_history,
    parse_start_request,
    parse_product_filters,
)

__all__ = [
    "require_param",
    "parse_history",
    "parse_start_request",
    "parse_product_filters",
]
