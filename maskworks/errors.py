"""SDF generation errors."""


class SdfError(Exception):
    """Base class for maskworks errors."""
    pass


class InvalidInputError(SdfError):
    """Input buffers violate the caller contract."""
    pass


class DimensionMismatchError(InvalidInputError):
    """Source and destination sizes or channel counts disagree."""
    pass


class UnsupportedChannelLayoutError(InvalidInputError):
    """Source image is not a 4-channel RGBA buffer."""
    pass


class DegenerateConfigError(SdfError):
    """Neither the inside nor the outside pass is enabled."""
    pass


class ConfigLoadError(SdfError):
    """Error loading generator settings file."""
    pass
