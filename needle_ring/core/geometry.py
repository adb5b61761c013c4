"""
Ring Segment Geometry
=====================

Builds annular wedges (the needle and the target zone) as triangle meshes.
The same vertex/triangle data serves both drawing and the collision outline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from needle_ring.core.config_loader import SegmentConfig


class InvalidGeometry(ValueError):
    """Raised when segment parameters would produce zero-area geometry."""


@dataclass(frozen=True)
class RingSegment:
    """
    Triangulated annular wedge in local space.

    Vertices alternate inner/outer radius points swept across the angular
    span; the wedge is centred on the +Y axis when the span is symmetric.
    """
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float
    resolution: int
    vertices: np.ndarray  # (2 * (resolution + 1), 2) float64
    indices: np.ndarray   # (6 * resolution,) int32, flat triangle list

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangles(self) -> np.ndarray:
        """Indices grouped as (2 * resolution, 3) rows."""
        return self.indices.reshape(-1, 3)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def triangle_points(self) -> List[Tuple[Tuple[float, float], ...]]:
        """Vertex coordinates for each triangle (collision outline pieces)."""
        return [
            tuple((float(self.vertices[i][0]), float(self.vertices[i][1])) for i in tri)
            for tri in self.triangles
        ]

    def rotated(self, angle: float) -> np.ndarray:
        """
        Vertices rotated counter-clockwise about the origin.

        Args:
            angle: Rotation in radians.

        Returns:
            New (vertex_count, 2) array.
        """
        c, s = math.cos(angle), math.sin(angle)
        rotation = np.array([[c, -s], [s, c]])
        return self.vertices @ rotation.T


def build_ring_segment(
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    resolution: int
) -> RingSegment:
    """
    Build a triangulated ring segment.

    For i in 0..resolution the angle is swept linearly from start to end and
    an inner then an outer point are emitted. Each consecutive pair of spokes
    forms one quad of two triangles.

    Args:
        inner_radius: Radius of the inner edge.
        outer_radius: Radius of the outer edge.
        start_angle: Start of the span in radians (0 points along +Y).
        end_angle: End of the span in radians.
        resolution: Number of quads across the span.

    Returns:
        The RingSegment.

    Raises:
        InvalidGeometry: If a radius or angle is not finite, resolution < 1,
            the span is zero, or the radius band is empty or negative.
    """
    if not all(math.isfinite(v) for v in (inner_radius, outer_radius, start_angle, end_angle)):
        raise InvalidGeometry(
            f"radii and angles must be finite, got r=({inner_radius}, {outer_radius}) "
            f"angles=({start_angle}, {end_angle})"
        )
    if resolution < 1:
        raise InvalidGeometry(f"resolution must be >= 1, got {resolution}")
    if end_angle == start_angle:
        raise InvalidGeometry(f"angular span must be nonzero, got {start_angle}..{end_angle}")
    if inner_radius < 0:
        raise InvalidGeometry(f"inner_radius must be >= 0, got {inner_radius}")
    if outer_radius <= inner_radius:
        raise InvalidGeometry(
            f"outer_radius ({outer_radius}) must exceed inner_radius ({inner_radius})"
        )

    angles = np.linspace(start_angle, end_angle, resolution + 1)
    radii = np.array([inner_radius, outer_radius])

    # Rows: (a0, inner), (a0, outer), (a1, inner), ...
    sin_a = np.repeat(np.sin(angles), 2)
    cos_a = np.repeat(np.cos(angles), 2)
    r = np.tile(radii, resolution + 1)
    vertices = np.column_stack((sin_a * r, cos_a * r))

    indices: List[int] = []
    for i in range(0, resolution * 2 - 1, 2):
        indices.extend((i, i + 2, i + 1))
        indices.extend((i + 1, i + 2, i + 3))

    return RingSegment(
        inner_radius=float(inner_radius),
        outer_radius=float(outer_radius),
        start_angle=float(start_angle),
        end_angle=float(end_angle),
        resolution=int(resolution),
        vertices=vertices,
        indices=np.array(indices, dtype=np.int32)
    )


def build_wedge(
    inner_radius: float,
    outer_radius: float,
    half_angle: float,
    resolution: int
) -> RingSegment:
    """Build a segment spanning [-half_angle, +half_angle]."""
    return build_ring_segment(inner_radius, outer_radius, -half_angle, half_angle, resolution)


def build_from_config(segment: SegmentConfig) -> RingSegment:
    """Build the wedge described by a needle/target config section."""
    return build_wedge(
        segment.inner_radius,
        segment.outer_radius,
        segment.half_angle,
        segment.resolution
    )
