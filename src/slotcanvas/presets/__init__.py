"""Preset persistence: validated page records grouped into presets."""

from .store import LocalPresetStore, Preset, PresetStore, validate_page_for_save

__all__ = [
    "LocalPresetStore",
    "Preset",
    "PresetStore",
    "validate_page_for_save",
]
