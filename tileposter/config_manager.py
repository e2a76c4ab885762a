"""Configuration persistence manager for the Tile Poster application.

This module handles loading and saving of the default filter and tile
settings to/from a JSON file.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from tileposter.image_processing.utils import hex_to_rgb, rgb_to_hex
from tileposter.models import (
    CONFIG_FILE,
    FilterParameters,
    PosterConfig,
    TileGridParameters,
    TileShape,
)

logger = logging.getLogger(__name__)


def config_to_dict(config: PosterConfig) -> dict:
    """Serialize a PosterConfig into JSON-friendly data."""
    filter_data = asdict(config.filter_params)
    filter_data["tint_color"] = rgb_to_hex(config.filter_params.tint_color)

    tile_data = asdict(config.tile_params)
    tile_data["shape"] = config.tile_params.shape.value
    tile_data["palette"] = [rgb_to_hex(c) for c in config.tile_params.palette]

    return {
        "filter": filter_data,
        "tiles": tile_data,
        "export_dir": config.export_dir,
        "seed": config.seed,
    }


def config_from_dict(data: dict) -> PosterConfig:
    """Build a PosterConfig from loaded JSON, falling back to defaults.

    Raises:
        ValueError: If a stored value is malformed or out of range
    """
    config = PosterConfig()
    filter_defaults = config.filter_params
    tile_defaults = config.tile_params

    filter_data = data.get("filter", {})
    tint = filter_data.get("tint_color")
    filter_params = FilterParameters(
        grayscale_enabled=bool(
            filter_data.get("grayscale_enabled", filter_defaults.grayscale_enabled)
        ),
        contrast_factor=float(
            filter_data.get("contrast_factor", filter_defaults.contrast_factor)
        ),
        grain_amplitude=float(
            filter_data.get("grain_amplitude", filter_defaults.grain_amplitude)
        ),
        tint_color=hex_to_rgb(tint) if tint else filter_defaults.tint_color,
    )

    tile_data = data.get("tiles", {})
    palette = tile_data.get("palette")
    tile_params = TileGridParameters(
        tile_size=int(tile_data.get("tile_size", tile_defaults.tile_size)),
        density=float(tile_data.get("density", tile_defaults.density)),
        variation_percent=int(
            tile_data.get("variation_percent", tile_defaults.variation_percent)
        ),
        clustering_enabled=bool(
            tile_data.get("clustering_enabled", tile_defaults.clustering_enabled)
        ),
        shape=TileShape(tile_data.get("shape", tile_defaults.shape.value)),
        palette=(
            tuple(hex_to_rgb(c) for c in palette) if palette else tile_defaults.palette
        ),
    )

    seed = data.get("seed", config.seed)
    return PosterConfig(
        filter_params=filter_params,
        tile_params=tile_params,
        export_dir=str(data.get("export_dir", config.export_dir)),
        seed=int(seed) if seed is not None else None,
    )


class ConfigManager:
    """Handles loading and saving of poster settings."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Create a manager for one settings file.

        Args:
            config_path: Path to configuration file (defaults to ~/.tileposter_config.json)
        """
        self.config_path = config_path

    def load(self) -> PosterConfig:
        """Read saved settings, or defaults when there are none.

        Returns:
            PosterConfig with loaded or default values
        """
        if not self.config_path.exists():
            return PosterConfig()

        try:
            with open(self.config_path, "r") as f:
                config = config_from_dict(json.load(f))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            # json.JSONDecodeError and ParameterOutOfRange are ValueErrors
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            return PosterConfig()

        logger.info("Loaded configuration from %s", self.config_path)
        return config

    def save(self, config: PosterConfig) -> Tuple[bool, Optional[str]]:
        """Write settings as JSON.

        Args:
            config: PosterConfig to save

        Returns:
            (True, None) on success, (False, reason) if the file could not be written
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(config_to_dict(config), f, indent=2)
        except OSError as e:
            logger.error("Could not save config file %s: %s", self.config_path, e)
            return False, str(e)
        return True, None
