"""
Anti-aliased signed sequential Euclidean distance transform (8SSEDT).

``compute_distance_field`` runs one pass over a 2D coverage array; the
generator combines an interior and an exterior pass into an SDF image.
"""

from .distance_field import DistanceFieldResult, compute, compute_distance_field
from .kernels import approximate_edge_delta

__all__ = [
    'DistanceFieldResult',
    'compute',
    'compute_distance_field',
    'approximate_edge_delta',
]
