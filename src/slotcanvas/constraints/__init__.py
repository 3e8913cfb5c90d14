"""Constraint enforcement for text and image slots."""

from .enforcer import ConstraintEnforcer, TextFit
from .image_fit import compute_image_fit

__all__ = [
    "ConstraintEnforcer",
    "TextFit",
    "compute_image_fit",
]
