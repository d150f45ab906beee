"""Utility functions for mpwire.

This module provides size calculation and header inspection helpers.
"""

from __future__ import annotations

from .sizing import describe_header, encoded_size, header_size

__all__ = [
    "encoded_size",
    "header_size",
    "describe_header",
]
