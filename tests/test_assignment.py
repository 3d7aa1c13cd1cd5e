"""
Test the parallel assignment phase.
"""

import numpy as np
import pytest

from kcentroids.clustering import (
    AssignmentError,
    Bounds,
    Cluster,
    Point,
    assign_points,
    chunk_points,
    nearest_cluster_index,
    random_points,
)


BOUNDS = Bounds(left=-5.0, right=5.0, bottom=-5.0, top=5.0)


def _clusters(*coords):
    return [Cluster(centroid=Point(x, y)) for x, y in coords]


def test_chunk_points_contiguous():
    """Chunks cover the input in order, last chunk possibly smaller."""
    print("Testing chunk_points...")

    points = [Point(float(i), 0.0) for i in range(10)]
    chunks = chunk_points(points, 4)

    assert [start for start, _ in chunks] == [0, 3, 6, 9]
    assert [len(chunk) for _, chunk in chunks] == [3, 3, 3, 1]

    rebuilt = [p for _, chunk in chunks for p in chunk]
    assert rebuilt == points, "Chunks should preserve input order"
    print("  ✓ 10 points -> chunks of 3, 3, 3, 1")


def test_chunk_points_edge_cases():
    points = [Point(float(i), 0.0) for i in range(3)]

    # More workers than points: one point per chunk, no empty chunks
    chunks = chunk_points(points, 8)
    assert [len(chunk) for _, chunk in chunks] == [1, 1, 1]

    assert chunk_points(points, 1) == [(0, points)]
    assert chunk_points([], 4) == []

    with pytest.raises(ValueError):
        chunk_points(points, 0)


def test_assign_points_matches_sequential():
    """Every point gets exactly one label, the same as a sequential scan."""
    print("Testing assign_points against sequential lookup...")

    rng = np.random.default_rng(42)
    points = random_points(1000, BOUNDS, rng)
    clusters = [Cluster.new_random(BOUNDS, rng) for _ in range(5)]
    centroids = [c.centroid for c in clusters]

    labels = assign_points(points, clusters, 4)

    assert len(labels) == len(points), "One label per point"
    expected = [nearest_cluster_index(p, centroids) for p in points]
    assert labels == expected
    print(f"  ✓ {len(points)} points assigned")


def test_assign_points_parallelism_invariant():
    rng = np.random.default_rng(3)
    points = random_points(333, BOUNDS, rng)
    clusters = [Cluster.new_random(BOUNDS, rng) for _ in range(7)]

    baseline = assign_points(points, clusters, 1)
    for parallelism in (2, 4, 16, 500):
        assert assign_points(points, clusters, parallelism) == baseline, \
            f"Labels differ with parallelism={parallelism}"


def test_assign_points_does_not_mutate_clusters():
    clusters = _clusters((0.0, 0.0), (4.0, 4.0))
    points = [Point(0.1, 0.1), Point(3.9, 4.2), Point(-1.0, 0.5)]

    labels = assign_points(points, clusters, 2)

    assert labels == [0, 1, 0]
    assert all(c.members == [] for c in clusters)
    assert clusters[0].centroid == Point(0.0, 0.0)


def test_assign_points_empty_input():
    assert assign_points([], _clusters((0.0, 0.0)), 4) == []


def test_assign_points_preconditions():
    points = [Point(0.0, 0.0)]
    with pytest.raises(ValueError):
        assign_points(points, _clusters((0.0, 0.0)), 0)
    with pytest.raises(ValueError):
        assign_points(points, [], 2)


class _BrokenPoint:
    """Point stand-in whose coordinates cannot be read."""

    @property
    def x(self):
        raise ZeroDivisionError("broken point")

    y = 0.0


def test_worker_failure_raises_instead_of_hanging():
    """A crashing worker surfaces as AssignmentError."""
    print("Testing worker failure propagation...")

    points = [Point(float(i), 0.0) for i in range(6)] + [_BrokenPoint()]
    with pytest.raises(AssignmentError) as excinfo:
        assign_points(points, _clusters((0.0, 0.0), (5.0, 0.0)), 3)

    assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
    print("  ✓ AssignmentError raised, chained to the worker exception")


class _Abort(BaseException):
    """Non-Exception failure, like an interrupt raised inside a worker."""


class _AbortingPoint:
    @property
    def x(self):
        raise _Abort("worker aborted")

    y = 0.0


def test_worker_base_exception_raises_instead_of_hanging():
    """BaseException in a worker still reaches the consumer."""
    points = [Point(float(i), 0.0) for i in range(4)] + [_AbortingPoint()]
    with pytest.raises(AssignmentError) as excinfo:
        assign_points(points, _clusters((0.0, 0.0), (5.0, 0.0)), 2)

    assert isinstance(excinfo.value.__cause__, _Abort)
