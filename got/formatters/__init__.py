"""Formatting utilities for got.

- view: renders the dashboard frame for the current view state
"""

from .view import render_view, format_file_line, format_branch_line

__all__ = [
    "render_view",
    "format_file_line",
    "format_branch_line",
]
