"""Content slot management: define, remove, look up and persist slots."""

from .manager import ContentSlotManager, SlotObserver, slot_id_for

__all__ = [
    "ContentSlotManager",
    "SlotObserver",
    "slot_id_for",
]
