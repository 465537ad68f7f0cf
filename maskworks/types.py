"""Core data types for maskworks - framework-agnostic."""

from __future__ import annotations

import enum
import dataclasses
from dataclasses import dataclass

from maskworks import defaults
from maskworks.errors import DegenerateConfigError


class FillMode(enum.Enum):
    """Output compositing policy for the RGB channels."""

    WHITE = "white"
    BLACK = "black"
    DISTANCE = "distance"  # Grayscale visualization of the field
    SOURCE = "source"  # Keep the source color, only alpha becomes the field

    @classmethod
    def parse(cls, value: "FillMode | str | int") -> "FillMode":
        """Resolve a fill mode from a member, its name/value, or its legacy index.

        Raises:
            ValueError: If the value does not name a fill mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown fill mode: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Fill mode index out of range: {value}")
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise ValueError(f"Unknown fill mode: {value!r}")


@dataclass
class GeneratorConfig:
    """Settings for SdfGenerator.

    Attributes:
        max_inside: Normalization radius of the interior pass in pixels (<= 0 disables it)
        max_outside: Normalization radius of the exterior pass in pixels (<= 0 disables it)
        post_process_distance: Refinement cutoff in pixels (<= 0 disables post-processing)
        fill_mode: RGB compositing policy
    """

    max_inside: float = defaults.DEFAULT_MAX_INSIDE
    max_outside: float = defaults.DEFAULT_MAX_OUTSIDE
    post_process_distance: float = defaults.DEFAULT_POST_PROCESS_DISTANCE
    fill_mode: FillMode = FillMode(defaults.DEFAULT_FILL_MODE)

    def __post_init__(self):
        self.fill_mode = FillMode.parse(self.fill_mode)

    @property
    def inside_enabled(self) -> bool:
        return self.max_inside > 0.0

    @property
    def outside_enabled(self) -> bool:
        return self.max_outside > 0.0

    @property
    def post_process_enabled(self) -> bool:
        return self.post_process_distance > 0.0

    def validate(self) -> None:
        """Reject configurations that would produce no field at all."""
        if not (self.inside_enabled or self.outside_enabled):
            raise DegenerateConfigError(
                f"Both passes disabled (max_inside={self.max_inside}, "
                f"max_outside={self.max_outside}); enable at least one radius"
            )

    def replace(self, **changes) -> "GeneratorConfig":
        return dataclasses.replace(self, **changes)
