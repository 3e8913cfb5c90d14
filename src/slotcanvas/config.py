"""Runtime settings loading.

Settings come from, in increasing priority: defaults, ``SLOTCANVAS_*``
environment variables (a ``.env`` file is loaded first), and an optional
YAML file passed to ``load_settings``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import AUTOFIT_TOLERANCE, DEBOUNCE_SECONDS, HTTP_TIMEOUT_SECONDS

# Load .env file
load_dotenv()


class SlotCanvasSettings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(env_prefix="SLOTCANVAS_", extra="ignore")

    fonts_dir: Optional[Path] = None
    use_system_fonts: bool = True
    log_dir: Path = Path("logs")
    presets_dir: Path = Path("presets")
    debounce_seconds: float = Field(default=DEBOUNCE_SECONDS, ge=0)
    autofit_tolerance: float = Field(default=AUTOFIT_TOLERANCE, gt=0)
    http_timeout: float = Field(default=HTTP_TIMEOUT_SECONDS, gt=0)


def load_settings(config_path: Path | None = None) -> SlotCanvasSettings:
    """Load settings, applying a YAML file on top of env and defaults.

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist.
    """
    if config_path is None:
        return SlotCanvasSettings()
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return SlotCanvasSettings(**data)
