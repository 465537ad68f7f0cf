"""
Numba kernels for the anti-aliased 8SSEDT distance transform.

All buffers are row-major 2D arrays indexed ``[y, x]``:

    alpha     (h, w)    float64   coverage for the current pass
    gradient  (h, w, 2) float64   unit edge gradient, zero away from edges
    distance  (h, w)    float64   running best distance estimate
    dx, dy    (h, w)    int32     offset to the believed-closest edge pixel

The sweep depends on scan-order side effects: every pixel reads neighbours
already visited in the same pass. Loop order here is part of the result.
"""

import numba
import numpy as np


SQRT2 = np.sqrt(2.0)


@numba.njit(cache=True)
def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


@numba.njit(cache=True)
def approximate_edge_delta(gx: float, gy: float, a: float) -> float:
    """
    Distance from a pixel center to a straight edge of direction (gx, gy)
    covering a fraction ``a`` of the pixel.

    (gx, gy) is either the local edge gradient or the direction to the pixel;
    the formula is the same for both.
    """
    if gx == 0.0 or gy == 0.0:
        # Exact when both are zero, still fair when only one is.
        return 0.5 - a

    length = np.sqrt(gx * gx + gy * gy)
    gx = abs(gx / length)
    gy = abs(gy / length)
    # Fold into the first octant: gx >= gy >= 0.
    if gx < gy:
        gx, gy = gy, gx

    a1 = 0.5 * gy / gx
    if a < a1:
        return 0.5 * (gx + gy) - np.sqrt(2.0 * gx * gy * a)
    if a <= 1.0 - a1:
        return (0.5 - a) * gx
    return -0.5 * (gx + gy) + np.sqrt(2.0 * gx * gy * (1.0 - a))


@numba.njit(cache=True)
def compute_edge_gradients(alpha: np.ndarray, gradient: np.ndarray) -> None:
    """
    Estimate the unit alpha gradient of every edge pixel (0 < alpha < 1).

    The 1-pixel border is skipped; those pixels, and every non-edge pixel,
    keep a zero gradient.
    """
    height, width = alpha.shape
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            a = alpha[y, x]
            if not (a > 0.0 and a < 1.0):
                continue

            # One diagonal cross term shared by both components.
            g = -alpha[y - 1, x - 1] - alpha[y + 1, x - 1] + alpha[y - 1, x + 1] + alpha[y + 1, x + 1]
            gx = g + (alpha[y, x + 1] - alpha[y, x - 1]) * SQRT2
            gy = g + (alpha[y + 1, x] - alpha[y - 1, x]) * SQRT2

            length = np.sqrt(gx * gx + gy * gy)
            if length > 0.0:
                gradient[y, x, 0] = gx / length
                gradient[y, x, 1] = gy / length


@numba.njit(cache=True)
def initialize_distances(
    alpha: np.ndarray,
    gradient: np.ndarray,
    distance: np.ndarray,
    dx: np.ndarray,
    dy: np.ndarray,
) -> None:
    """Seed distances: +inf outside, 0 inside, sub-pixel estimate on edges."""
    height, width = alpha.shape
    for y in range(height):
        for x in range(width):
            dx[y, x] = 0
            dy[y, x] = 0
            a = alpha[y, x]
            if a <= 0.0:
                distance[y, x] = np.inf
            elif a < 1.0:
                distance[y, x] = approximate_edge_delta(gradient[y, x, 0], gradient[y, x, 1], a)
            else:
                distance[y, x] = 0.0


@numba.njit(cache=True)
def update_distance(
    alpha: np.ndarray,
    distance: np.ndarray,
    dx: np.ndarray,
    dy: np.ndarray,
    x: int,
    y: int,
    ox: int,
    oy: int,
) -> None:
    """Try to improve pixel (x, y) through the closest pixel of neighbour (x+ox, y+oy)."""
    height, width = alpha.shape

    nx = x + ox
    ny = y + oy
    if not in_bounds(nx, ny, width, height):
        return

    ndx = dx[ny, nx]
    ndy = dy[ny, nx]
    cx = nx - ndx
    cy = ny - ndy
    if not in_bounds(cx, cy, width, height):
        return

    closest_alpha = alpha[cy, cx]
    if closest_alpha == 0.0 or (cx == x and cy == y):
        # Neighbour has no closest yet, or its closest is this pixel.
        return

    cdx = ndx - ox
    cdy = ndy - oy
    d = np.sqrt(float(cdx * cdx + cdy * cdy)) + approximate_edge_delta(float(cdx), float(cdy), closest_alpha)
    if d < distance[y, x]:
        distance[y, x] = d
        dx[y, x] = cdx
        dy[y, x] = cdy


@numba.njit(cache=True)
def sweep_distances(
    alpha: np.ndarray,
    distance: np.ndarray,
    dx: np.ndarray,
    dy: np.ndarray,
) -> None:
    """
    Eight-point signed sequential Euclidean distance transform.

    One top-to-bottom pass followed by one bottom-to-top pass. Pixels with a
    non-positive distance are resolved and never touched.
    """
    height, width = alpha.shape

    # Scan up.
    for y in range(1, height):
        # |P.
        # |XX
        if distance[y, 0] > 0.0:
            update_distance(alpha, distance, dx, dy, 0, y, 0, -1)
            update_distance(alpha, distance, dx, dy, 0, y, 1, -1)

        # -->
        # XP.
        # XXX
        for x in range(1, width - 1):
            if distance[y, x] > 0.0:
                update_distance(alpha, distance, dx, dy, x, y, -1, 0)
                update_distance(alpha, distance, dx, dy, x, y, -1, -1)
                update_distance(alpha, distance, dx, dy, x, y, 0, -1)
                update_distance(alpha, distance, dx, dy, x, y, 1, -1)

        # XP|
        # XX|
        x = width - 1
        if distance[y, x] > 0.0:
            update_distance(alpha, distance, dx, dy, x, y, -1, 0)
            update_distance(alpha, distance, dx, dy, x, y, -1, -1)
            update_distance(alpha, distance, dx, dy, x, y, 0, -1)

        # <--
        # .PX
        for x in range(width - 2, -1, -1):
            if distance[y, x] > 0.0:
                update_distance(alpha, distance, dx, dy, x, y, 1, 0)

    # Scan down.
    for y in range(height - 2, -1, -1):
        # XX|
        # .P|
        x = width - 1
        if distance[y, x] > 0.0:
            update_distance(alpha, distance, dx, dy, x, y, 0, 1)
            update_distance(alpha, distance, dx, dy, x, y, -1, 1)

        # <--
        # XXX
        # .PX
        for x in range(width - 2, 0, -1):
            if distance[y, x] > 0.0:
                update_distance(alpha, distance, dx, dy, x, y, 1, 0)
                update_distance(alpha, distance, dx, dy, x, y, 1, 1)
                update_distance(alpha, distance, dx, dy, x, y, 0, 1)
                update_distance(alpha, distance, dx, dy, x, y, -1, 1)

        # |XX
        # |PX
        if distance[y, 0] > 0.0:
            update_distance(alpha, distance, dx, dy, 0, y, 1, 0)
            update_distance(alpha, distance, dx, dy, 0, y, 1, 1)
            update_distance(alpha, distance, dx, dy, 0, y, 0, 1)

        # -->
        # XP.
        for x in range(1, width):
            if distance[y, x] > 0.0:
                update_distance(alpha, distance, dx, dy, x, y, -1, 0)


@numba.njit(cache=True)
def post_process(
    alpha: np.ndarray,
    gradient: np.ndarray,
    distance: np.ndarray,
    dx: np.ndarray,
    dy: np.ndarray,
    max_distance: float,
) -> None:
    """
    Refine propagated distances below ``max_distance`` using the edge
    gradient of the closest pixel.
    """
    height, width = alpha.shape
    for y in range(height):
        for x in range(width):
            ox = dx[y, x]
            oy = dy[y, x]
            if (ox == 0 and oy == 0) or distance[y, x] >= max_distance:
                # Edge, inside, or beyond the cutoff.
                continue

            cx = x - ox
            cy = y - oy
            if not in_bounds(cx, cy, width, height):
                continue
            gx = gradient[cy, cx, 0]
            gy = gradient[cy, cx, 1]
            if gx == 0.0 and gy == 0.0:
                continue

            # Hit point offset on the edge line inside the closest pixel.
            fx = float(ox)
            fy = float(oy)
            df = approximate_edge_delta(gx, gy, alpha[cy, cx])
            t = fy * gx - fx * gy
            u = -df * gx + t * gy
            v = -df * gy - t * gx

            if abs(u) <= 0.5 and abs(v) <= 0.5:
                distance[y, x] = np.sqrt((fx + u) * (fx + u) + (fy + v) * (fy + v))
