"""
Data models for k-means clustering.

Defines the point, bounding region and cluster types the convergence loop works on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Sequence

import numpy as np


class Bounds(NamedTuple):
    """Rectangular region of the plane where points and centroids live."""

    left: float
    right: float
    bottom: float
    top: float


@dataclass(frozen=True)
class Point:
    """Immutable 2-D coordinate."""

    x: float
    y: float

    @classmethod
    def random_within(cls, bounds: Bounds, rng: np.random.Generator) -> Point:
        """Draw x from [left, right] and y from [bottom, top], independently."""
        x = rng.uniform(bounds.left, bounds.right)
        y = rng.uniform(bounds.bottom, bounds.top)
        return cls(float(x), float(y))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def squared_distance(a: Point, b: Point) -> float:
    """Squared Euclidean distance. Orders points the same way as the true distance."""
    return (a.x - b.x) ** 2 + (a.y - b.y) ** 2


def nearest_cluster_index(point: Point, centroids: Sequence[Point]) -> int:
    """
    Index of the centroid closest to point.

    Ties go to the lowest index (strict < during a left-to-right scan).
    """
    if not centroids:
        raise ValueError("nearest_cluster_index needs at least one centroid")

    best_idx = 0
    best_distance = float('inf')
    for i, centroid in enumerate(centroids):
        distance = squared_distance(point, centroid)
        if distance < best_distance:
            best_distance = distance
            best_idx = i

    return best_idx


@dataclass
class Cluster:
    """A centroid plus the points currently assigned to it."""

    centroid: Point
    members: list[Point] = field(default_factory=list)  # rebuilt every iteration

    @classmethod
    def new_random(cls, bounds: Bounds, rng: np.random.Generator) -> Cluster:
        """Create an empty cluster with a random centroid inside bounds."""
        return cls(centroid=Point.random_within(bounds, rng))

    @property
    def size(self) -> int:
        return len(self.members)

    def clear_members(self) -> None:
        self.members.clear()

    def recompute_centroid(self) -> float:
        """
        Move the centroid to the mean of the current members.

        Returns the squared distance the centroid moved. An empty cluster keeps its
        centroid and reports no movement.
        """
        if not self.members:
            return 0.0

        coords = np.array([(p.x, p.y) for p in self.members], dtype=np.float64)
        mean = coords.mean(axis=0)
        new_centroid = Point(float(mean[0]), float(mean[1]))

        change = squared_distance(self.centroid, new_centroid)
        self.centroid = new_centroid
        return change


def random_points(n: int, bounds: Bounds, rng: np.random.Generator) -> list[Point]:
    """Generate n points uniformly inside bounds."""
    return [Point.random_within(bounds, rng) for _ in range(n)]


def gaussian_blobs(
    n: int,
    centers: Sequence[Point],
    std: float,
    rng: np.random.Generator,
    bounds: Optional[Bounds] = None,
) -> list[Point]:
    """
    Generate n points scattered around centers.

    Points are dealt to the centers round-robin, each drawn from an isotropic
    normal distribution with the given standard deviation. When bounds is given,
    coordinates are clipped to it.

    Args:
        n: Number of points to generate
        centers: Blob centers (at least one)
        std: Standard deviation of each blob
        rng: Random generator
        bounds: Optional region to clip points into

    Returns:
        List of n points
    """
    if not centers:
        raise ValueError("gaussian_blobs needs at least one center")

    offsets = rng.normal(0.0, std, size=(n, 2))
    points = []
    for i in range(n):
        center = centers[i % len(centers)]
        x = center.x + offsets[i, 0]
        y = center.y + offsets[i, 1]
        if bounds is not None:
            x = np.clip(x, bounds.left, bounds.right)
            y = np.clip(y, bounds.bottom, bounds.top)
        points.append(Point(float(x), float(y)))
    return points
