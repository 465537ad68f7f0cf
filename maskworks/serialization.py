"""Generator settings serialization - save/load GeneratorConfig as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from maskworks import defaults
from maskworks.errors import ConfigLoadError
from maskworks.types import FillMode, GeneratorConfig

SCHEMA_VERSION = "1.0"
SECTION_NAME = "sdf_generator"


def save_config(config: GeneratorConfig, filepath: str) -> None:
    """Save generator settings to a JSON file.

    Format:
        {
          "schema_version": "1.0",
          "sdf_generator": {"max_inside": ..., "fill_mode": "white", ...}
        }
    """
    filepath = Path(filepath)
    metadata = {
        'schema_version': SCHEMA_VERSION,
        SECTION_NAME: config_to_dict(config),
    }
    filepath.write_text(json.dumps(metadata, indent=2))


def load_config(filepath: str) -> GeneratorConfig:
    """Load generator settings from a JSON file.

    Raises:
        ConfigLoadError: If file is corrupt, wrong version, or missing data
        FileNotFoundError: If file doesn't exist
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Settings file not found: {filepath}")

    try:
        metadata = json.loads(filepath.read_text())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"Corrupt settings file {filepath}: {e}")

    if not isinstance(metadata, dict):
        raise ConfigLoadError(f"Settings file {filepath} must hold a JSON object")

    schema_version = metadata.get('schema_version', SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ConfigLoadError(
            f"Schema version {schema_version} not supported. Expected {SCHEMA_VERSION}."
        )

    if SECTION_NAME not in metadata:
        raise ConfigLoadError(f'"{SECTION_NAME}" section not found in {filepath}')

    return dict_to_config(metadata[SECTION_NAME])


# ============================================================================
# Conversion helpers
# ============================================================================

def config_to_dict(config: GeneratorConfig) -> dict[str, Any]:
    """Convert GeneratorConfig to JSON-serializable dict."""
    return {
        'max_inside': float(config.max_inside),
        'max_outside': float(config.max_outside),
        'post_process_distance': float(config.post_process_distance),
        'fill_mode': config.fill_mode.value,
    }


def dict_to_config(data: dict[str, Any]) -> GeneratorConfig:
    """Reconstruct GeneratorConfig from dict, using defaults for missing keys."""
    try:
        fill_mode = FillMode.parse(data.get('fill_mode', defaults.DEFAULT_FILL_MODE))
        return GeneratorConfig(
            max_inside=float(data.get('max_inside', defaults.DEFAULT_MAX_INSIDE)),
            max_outside=float(data.get('max_outside', defaults.DEFAULT_MAX_OUTSIDE)),
            post_process_distance=float(
                data.get('post_process_distance', defaults.DEFAULT_POST_PROCESS_DISTANCE)
            ),
            fill_mode=fill_mode,
        )
    except (ValueError, TypeError, AttributeError) as e:
        raise ConfigLoadError(f"Invalid generator settings: {e}")
