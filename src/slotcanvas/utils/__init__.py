"""Utility modules for SlotCanvas."""

from .text_fitting import (
    FitResult,
    TextFitter,
    TextLayout,
    TextStyle,
)

__all__ = [
    # Text fitting
    "FitResult",
    "TextFitter",
    "TextLayout",
    "TextStyle",
]
