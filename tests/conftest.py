"""Test configuration for maskworks."""

import numpy as np
import pytest

from maskworks.mask_utils import mask_to_rgba


def make_disk_alpha(size: int = 32, radius: float = 9.5, supersample: int = 4) -> np.ndarray:
    """Anti-aliased disk coverage, centered on the canvas."""
    n = size * supersample
    coords = (np.arange(n) + 0.5) / supersample
    yy, xx = np.meshgrid(coords, coords, indexing="ij")
    center = size / 2.0
    inside = ((xx - center) ** 2 + (yy - center) ** 2 <= radius ** 2).astype(np.float32)
    return inside.reshape(size, supersample, size, supersample).mean(axis=(1, 3))


@pytest.fixture
def disk_alpha():
    return make_disk_alpha()


@pytest.fixture
def disk_image(disk_alpha):
    """RGBA disk with random RGB so color pass-through is observable."""
    rng = np.random.default_rng(7)
    image = mask_to_rgba(disk_alpha)
    image[..., :3] = rng.random((*disk_alpha.shape, 3), dtype=np.float32)
    return image


@pytest.fixture
def square_mask():
    """5x5 opaque block surrounded by a 1-pixel transparent border."""
    mask = np.zeros((7, 7), dtype=np.float32)
    mask[1:6, 1:6] = 1.0
    return mask


@pytest.fixture
def hard_square_image():
    """Hard-edged 8x8 block centered on a 20x20 canvas."""
    mask = np.zeros((20, 20), dtype=np.float32)
    mask[6:14, 6:14] = 1.0
    return mask_to_rgba(mask)
