import numpy as np
from pathlib import Path
from PIL import Image
from scipy.ndimage import gaussian_filter

def load_rgba(path) -> np.ndarray:
    """Load an image as float32 RGBA in [0, 1], shape (height, width, 4)."""
    img = Image.open(path).convert('RGBA')
    return (np.asarray(img, dtype=np.float32) / 255.0).astype(np.float32)

def save_rgba(image: np.ndarray, path) -> None:
    """Save a float RGBA image as an 8-bit PNG (values clipped to [0, 1])."""
    rgba = (np.clip(image, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(rgba).save(path)

def mask_to_rgba(mask: np.ndarray, color: tuple[float, float, float] = (1.0, 1.0, 1.0)) -> np.ndarray:
    """Wrap a 2D coverage mask as a solid-color RGBA image."""
    mask = np.asarray(mask, dtype=np.float32)
    rgba = np.empty((*mask.shape, 4), dtype=np.float32)
    rgba[..., :3] = np.asarray(color, dtype=np.float32)
    rgba[..., 3] = mask
    return rgba

def soften_alpha(alpha: np.ndarray, sigma: float) -> np.ndarray:
    """Spread hard 0/1 coverage edges over fractional pixels.

    A binary mask only seeds whole-pixel boundaries; after a Gaussian of
    ``sigma`` pixels each boundary runs through partially covered pixels the
    sub-pixel edge estimate can use. ``sigma <= 0`` returns ``alpha`` as is.
    """
    if sigma <= 0:
        return alpha
    soft = gaussian_filter(np.asarray(alpha, dtype=np.float32), sigma=sigma, mode='nearest')
    return np.clip(soft, 0.0, 1.0, out=soft)
