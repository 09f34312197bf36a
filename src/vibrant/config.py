"""
OmegaConf-based configuration for palette extraction.

Thresholds that would otherwise be module globals (lightness cutoffs, text
contrast minimums, Lab white point) live here so they can be overridden from
YAML files, the CLI or tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from omegaconf import OmegaConf

from vibrant.quantizer.filters import BLACK_MAX_LIGHTNESS, WHITE_MIN_LIGHTNESS, ColorFilter
from vibrant.swatch import MIN_CONTRAST_BODY_TEXT, MIN_CONTRAST_TITLE_TEXT
from vibrant.utils.colors import LAB_REFERENCE_WHITE

logger = logging.getLogger(__name__)


@dataclass
class QuantizerConfig:
    """Configuration for the color-cut quantizer."""
    max_colors: int = 16
    black_max_lightness: float = BLACK_MAX_LIGHTNESS
    white_min_lightness: float = WHITE_MIN_LIGHTNESS

    def color_filter(self) -> ColorFilter:
        return ColorFilter(self.black_max_lightness, self.white_min_lightness)


@dataclass
class BitmapConfig:
    """Configuration for pixel sampling."""
    resize_max_dimension: int = 192  # 0 disables downscaling
    crop: Optional[List[int]] = None  # [left, top, right, bottom]


@dataclass
class ContrastConfig:
    """Minimum WCAG contrast for white text on a swatch."""
    min_contrast_title_text: float = MIN_CONTRAST_TITLE_TEXT
    min_contrast_body_text: float = MIN_CONTRAST_BODY_TEXT


@dataclass
class LabConfig:
    """Reference white point for CIE Lab conversion."""
    reference_x: float = LAB_REFERENCE_WHITE[0]
    reference_y: float = LAB_REFERENCE_WHITE[1]
    reference_z: float = LAB_REFERENCE_WHITE[2]

    @property
    def reference_white(self) -> tuple[float, float, float]:
        return self.reference_x, self.reference_y, self.reference_z


@dataclass
class PaletteConfig:
    """Top-level configuration.

    Can be loaded from YAML and overridden programmatically or from the CLI.
    """
    quantizer: QuantizerConfig = field(default_factory=QuantizerConfig)
    bitmap: BitmapConfig = field(default_factory=BitmapConfig)
    contrast: ContrastConfig = field(default_factory=ContrastConfig)
    lab: LabConfig = field(default_factory=LabConfig)

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None


def load_config(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> PaletteConfig:
    """Load configuration from a YAML file with optional overrides.

    Priority, highest first:
    1. Programmatic overrides (nested dicts, e.g. ``{"quantizer": {"max_colors": 8}}``)
    2. YAML config file
    3. Dataclass defaults

    Args:
        config_path: Path to a YAML config file. A missing file is logged
            and ignored.
        overrides: Dictionary of overrides.

    Returns:
        Merged PaletteConfig.
    """
    merged = OmegaConf.structured(PaletteConfig())

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            merged = OmegaConf.merge(merged, OmegaConf.load(config_path))
            logger.info("Config loaded from: %s", config_path)
        else:
            logger.warning("Config file not found: %s, using defaults", config_path)

    if overrides:
        merged = OmegaConf.merge(merged, OmegaConf.create(overrides))

    return OmegaConf.to_object(merged)


def save_config(config: PaletteConfig, path: str | Path) -> Path:
    """Save configuration to a YAML file.

    Returns:
        Path to the saved config file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        OmegaConf.save(OmegaConf.structured(config), f)
    logger.info("Config saved to: %s", path)
    return path
