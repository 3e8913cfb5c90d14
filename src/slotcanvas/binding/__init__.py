"""End-user content binding: apply user values, debounce, session locking."""

from .binder import BindListener, BindReport, ContentBinder, resolve_content_map
from .debounce import Debouncer
from .session import EditingSession

__all__ = [
    "BindListener",
    "BindReport",
    "ContentBinder",
    "Debouncer",
    "EditingSession",
    "resolve_content_map",
]
