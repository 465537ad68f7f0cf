"""Signed distance field generation from anti-aliased alpha masks.

Example:
    from maskworks import GeneratorConfig, FillMode, generate

    config = GeneratorConfig(max_inside=16, max_outside=16, fill_mode=FillMode.DISTANCE)
    sdf = generate(rgba_image, config)
"""

from .errors import (
    SdfError,
    InvalidInputError,
    DimensionMismatchError,
    UnsupportedChannelLayoutError,
    DegenerateConfigError,
    ConfigLoadError,
)
from .types import FillMode, GeneratorConfig
from .generator import SdfGenerator, generate, signed_distance

__all__ = [
    'SdfGenerator',
    'generate',
    'signed_distance',
    'FillMode',
    'GeneratorConfig',
    # Errors
    'SdfError',
    'InvalidInputError',
    'DimensionMismatchError',
    'UnsupportedChannelLayoutError',
    'DegenerateConfigError',
    'ConfigLoadError',
]
