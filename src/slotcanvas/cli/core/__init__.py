"""Core utilities for CLI - pure functions and shared types."""

from .console import console, print_error, print_success, print_warning
from .parsers import parse_assignments
from .types import Failure, Result, Success

__all__ = [
    # Types
    "Result",
    "Success",
    "Failure",
    # Parsers
    "parse_assignments",
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
]
