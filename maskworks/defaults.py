"""Central place for maskworks default settings."""

# SDF generator radii (pixels). A non-positive radius disables that pass.
DEFAULT_MAX_INSIDE: float = 50.0
DEFAULT_MAX_OUTSIDE: float = 0.0
DEFAULT_POST_PROCESS_DISTANCE: float = 0.0  # 0 disables post-processing

# Output compositing
DEFAULT_FILL_MODE: str = "white"

# Mask preparation
DEFAULT_SOFTEN_SIGMA: float = 0.0  # Gaussian sigma in pixels (0 = keep hard edges)
