"""Errors raised by the Bloom filter core."""
from __future__ import annotations

__all__ = ["InvalidParameter"]


class InvalidParameter(ValueError):
    """Raised when a filter (or one of its parts) is built from bad sizing inputs.

    Only construction can fail; once a filter exists every operation on it is
    total.
    """
