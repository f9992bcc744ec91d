"""Application configuration model."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from chaindeck.exceptions import ConfigFileInvalidError, wrap_pydantic_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".chaindeck" / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Device
    device_model: str = Field(
        default="studio",
        description="Stream Deck model to drive (case-insensitive match on the model name)",
    )
    brightness: int = Field(default=100, ge=0, le=100, description="Panel brightness in percent")

    # Button faces
    corner_radius: int = Field(default=20, ge=0, description="Button background corner radius")
    nav_font_size: int = Field(default=16, gt=0, description="Font size for navigation and chains")
    module_font_size: int = Field(default=12, gt=0, description="Font size for module buttons")

    # Module activation
    midi_output_port: str | None = Field(
        default=None,
        description="MIDI output port for module activation (None = log only)",
    )

    # Input
    event_queue_size: int = Field(
        default=256, gt=0, description="Maximum pending input events before new ones are dropped"
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return defaults when the file doesn't exist.

        Args:
            path: Path to config file. If None, uses ~/.chaindeck/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        if not path.exists():
            logger.info(f"No config file at {path}, using defaults")
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigFileInvalidError(str(path), str(e)) from e

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise wrap_pydantic_error(e, str(path)) from e

        logger.info(f"Loaded config from {path}")
        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2))
