"""Preset commands: presets, save, export."""
