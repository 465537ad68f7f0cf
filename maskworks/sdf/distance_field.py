from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

from maskworks.errors import DimensionMismatchError
from .kernels import (
    compute_edge_gradients,
    initialize_distances,
    post_process,
    sweep_distances,
)


@dataclass
class DistanceFieldResult:
    """Per-pixel output of one distance transform pass.

    ``distance`` is in pixels; ``dx``/``dy`` point from each pixel to the pixel
    it believes is nearest to the boundary, ``(0, 0)`` when the pixel was
    resolved analytically.
    """

    distance: np.ndarray
    dx: np.ndarray
    dy: np.ndarray
    gradient: np.ndarray

    @property
    def height(self) -> int:
        return self.distance.shape[0]

    @property
    def width(self) -> int:
        return self.distance.shape[1]

    def samples(self) -> Iterator[Tuple[float, int, int, Tuple[float, float]]]:
        """Yield ``(distance, dX, dY, (gx, gy))`` in row-major order."""
        distance = self.distance.ravel()
        dx = self.dx.ravel()
        dy = self.dy.ravel()
        gradient = self.gradient.reshape(-1, 2)
        for i in range(distance.size):
            yield (
                float(distance[i]),
                int(dx[i]),
                int(dy[i]),
                (float(gradient[i, 0]), float(gradient[i, 1])),
            )


def compute_distance_field(
    alpha: np.ndarray,
    post_process_distance: float = 0.0,
) -> DistanceFieldResult:
    """
    Anti-aliased Euclidean distance from every pixel to the region alpha > 0.

    Stages, in order: edge gradients, distance seeding, the two-directional
    8SSEDT sweep, then (when ``post_process_distance > 0``) gradient-based
    refinement of propagated pixels closer than that cutoff.

    Parameters
    ----------
    alpha:
        2D coverage array, shape (height, width). Values are used as given;
        nothing is clamped.
    post_process_distance:
        Refinement cutoff in pixels. Non-positive disables the refinement.
    """
    alpha = np.asarray(alpha)
    if alpha.ndim != 2 or alpha.size == 0:
        raise DimensionMismatchError(
            f"Alpha must be a non-empty 2D array, got shape {alpha.shape}"
        )

    height, width = alpha.shape
    # Scratch buffers are fresh per call.
    alpha = np.ascontiguousarray(alpha, dtype=np.float64)
    gradient = np.zeros((height, width, 2), dtype=np.float64)
    distance = np.empty((height, width), dtype=np.float64)
    dx = np.zeros((height, width), dtype=np.int32)
    dy = np.zeros((height, width), dtype=np.int32)

    compute_edge_gradients(alpha, gradient)
    initialize_distances(alpha, gradient, distance, dx, dy)
    sweep_distances(alpha, distance, dx, dy)
    if post_process_distance > 0.0:
        post_process(alpha, gradient, distance, dx, dy, float(post_process_distance))

    return DistanceFieldResult(distance=distance, dx=dx, dy=dy, gradient=gradient)


def compute(
    alpha_samples: Sequence[float],
    width: int,
    height: int,
    post_process_distance: float = 0.0,
) -> DistanceFieldResult:
    """Flat row-major form of :func:`compute_distance_field` (index = y*width + x)."""
    if width <= 0 or height <= 0:
        raise DimensionMismatchError(f"Dimensions must be positive, got {width}x{height}")

    samples = np.asarray(alpha_samples, dtype=np.float64).ravel()
    if samples.size != width * height:
        raise DimensionMismatchError(
            f"Expected {width * height} samples for {width}x{height}, got {samples.size}"
        )

    return compute_distance_field(samples.reshape(height, width), post_process_distance)
