"""SDF image generation - combines interior and exterior distance passes."""

from __future__ import annotations

import logging
import time

import numpy as np

from maskworks.errors import DimensionMismatchError, UnsupportedChannelLayoutError
from maskworks.sdf import compute_distance_field
from maskworks.types import FillMode, GeneratorConfig

logger = logging.getLogger(__name__)


def _validate_buffers(source: np.ndarray, out: np.ndarray | None) -> None:
    if out is not None and out.shape != source.shape:
        raise DimensionMismatchError(
            f"Source {source.shape} and destination {out.shape} must be the same size"
        )
    if source.ndim != 3 or source.shape[2] != 4:
        raise UnsupportedChannelLayoutError(
            f"Image must be RGBA with shape (height, width, 4), got {source.shape}"
        )
    if source.shape[0] == 0 or source.shape[1] == 0:
        raise DimensionMismatchError(f"Image must not be empty, got {source.shape}")


def _distance_pass(alpha: np.ndarray, post_process_distance: float, label: str) -> np.ndarray:
    t0 = time.perf_counter()
    result = compute_distance_field(alpha, post_process_distance)
    logger.debug(
        "%s pass on %dx%d took %.1f ms",
        label, result.width, result.height, (time.perf_counter() - t0) * 1000.0,
    )
    return result.distance


class SdfGenerator:
    """Converts the alpha channel of an RGBA image into a signed distance field.

    Attributes:
        config: Radii, post-processing cutoff and fill mode
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config if config is not None else GeneratorConfig()

    def __repr__(self) -> str:
        return f"SdfGenerator(config={self.config})"

    def generate(self, source: np.ndarray, out: np.ndarray | None = None) -> np.ndarray:
        """Render the SDF of ``source`` into an RGBA float image.

        The result is float32, or wider when the source is (a float64 source
        keeps its RGB exactly in SOURCE mode). A given ``out`` sets the dtype.

        Args:
            source: RGBA image, shape (height, width, 4); only alpha drives the field
            out: Optional destination of the same shape. Written only when the
                whole pipeline succeeded.

        Returns:
            The output image (``out`` itself when given)

        Raises:
            DimensionMismatchError: If ``out`` and ``source`` shapes disagree
            UnsupportedChannelLayoutError: If ``source`` is not 4-channel
            DegenerateConfigError: If neither pass is enabled
        """
        source = np.asarray(source)
        _validate_buffers(source, out)
        config = self.config
        config.validate()

        height, width = source.shape[:2]
        src_alpha = source[..., 3].astype(np.float64)
        mode = config.fill_mode
        fill = 1.0 if mode == FillMode.WHITE else 0.0

        logger.debug(
            "Generating %dx%d SDF (inside=%s, outside=%s, post=%s, mode=%s)",
            width, height, config.max_inside, config.max_outside,
            config.post_process_distance, mode.value,
        )

        dtype = out.dtype if out is not None else np.result_type(source.dtype, np.float32)
        result = np.zeros((height, width, 4), dtype=dtype)
        result[..., :3] = fill
        field = np.zeros((height, width), dtype=np.float64)

        if config.inside_enabled:
            inside = _distance_pass(1.0 - src_alpha, config.post_process_distance, "Inside")
            field = np.clip(inside * (1.0 / config.max_inside), 0.0, 1.0)

        if config.outside_enabled:
            outside = _distance_pass(src_alpha, config.post_process_distance, "Outside")
            outside = outside * (1.0 / config.max_outside)
            if config.inside_enabled:
                field = 0.5 + (field - np.clip(outside, 0.0, 1.0)) * 0.5
            else:
                field = np.clip(1.0 - outside, 0.0, 1.0)

        result[..., 3] = field

        if mode == FillMode.DISTANCE:
            result[..., :3] = result[..., 3:4]
        elif mode == FillMode.SOURCE:
            result[..., :3] = source[..., :3]

        if out is None:
            return result
        out[...] = result
        return out


def generate(
    source: np.ndarray,
    config: GeneratorConfig | None = None,
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Module-level shortcut for ``SdfGenerator(config).generate(source, out)``."""
    return SdfGenerator(config).generate(source, out)


def signed_distance(source_alpha: np.ndarray, post_process_distance: float = 0.0) -> np.ndarray:
    """Raw signed distance in pixels: positive outside the mask, negative inside.

    Args:
        source_alpha: 2D mask coverage in [0, 1]
        post_process_distance: Refinement cutoff in pixels (0 disables)
    """
    source_alpha = np.asarray(source_alpha, dtype=np.float64)
    inside = _distance_pass(1.0 - source_alpha, post_process_distance, "Inside")
    outside = _distance_pass(source_alpha, post_process_distance, "Outside")
    return outside - inside
