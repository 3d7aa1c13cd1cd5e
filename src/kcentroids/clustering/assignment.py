"""
Parallel nearest-centroid assignment.

Each assignment phase splits the points into contiguous chunks, hands every chunk to
its own worker thread, and collects (point_index, cluster_index) results from a
shared queue. Workers only read a frozen snapshot of the centroids; all cluster
mutation happens in the caller once the phase has returned.
"""

from __future__ import annotations

import math
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from .models import Cluster, Point, nearest_cluster_index


class AssignmentError(RuntimeError):
    """A worker failed during an assignment phase."""


class _WorkerFailure:
    """Queue marker sent by a worker that raised, in place of its remaining results."""

    __slots__ = ('exc',)

    def __init__(self, exc: BaseException):
        self.exc = exc


def chunk_points(
    points: Sequence[Point],
    num_chunks: int,
) -> list[tuple[int, Sequence[Point]]]:
    """
    Split points into at most num_chunks contiguous chunks.

    Chunks have ceil(n / num_chunks) points each, the last one possibly fewer.
    Empty chunks are not returned.

    Returns:
        List of (start_index, chunk) pairs in input order
    """
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be >= 1, got {num_chunks}")
    if not points:
        return []

    chunk_size = math.ceil(len(points) / num_chunks)
    return [
        (start, points[start:start + chunk_size])
        for start in range(0, len(points), chunk_size)
    ]


def _assign_chunk(
    start: int,
    chunk: Sequence[Point],
    centroids: tuple[Point, ...],
    results: queue.Queue,
) -> None:
    """Worker body: send one (index, cluster_index) result per point in chunk."""
    try:
        for offset, point in enumerate(chunk):
            results.put((start + offset, nearest_cluster_index(point, centroids)))
    except BaseException as exc:
        # Without the marker the consumer would wait forever for this chunk
        results.put(_WorkerFailure(exc))
        raise


def assign_points(
    points: Sequence[Point],
    clusters: Sequence[Cluster],
    parallelism: int,
) -> list[int]:
    """
    Find the nearest cluster for every point, using parallel workers.

    Blocks until every worker of the phase has finished. The returned labels are
    indexed by point position, so the outcome does not depend on the order in
    which results arrive or on the degree of parallelism.

    Args:
        points: Points to assign (read only)
        clusters: Current clusters (read only during the phase)
        parallelism: Number of chunks / worker threads

    Returns:
        labels[i] = index of the cluster nearest to points[i]
    """
    if parallelism < 1:
        raise ValueError(f"parallelism must be >= 1, got {parallelism}")
    if not clusters:
        raise ValueError("assign_points needs at least one cluster")

    chunks = chunk_points(points, parallelism)
    if not chunks:
        return []

    centroids = tuple(cluster.centroid for cluster in clusters)
    results: queue.Queue = queue.Queue()
    labels: list[int] = [-1] * len(points)

    with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="assign") as pool:
        for start, chunk in chunks:
            pool.submit(_assign_chunk, start, chunk, centroids, results)

        # Fixed-count termination: stop once every point has reported
        received = 0
        while received < len(points):
            item = results.get()
            if isinstance(item, _WorkerFailure):
                raise AssignmentError(f"assignment worker failed: {item.exc}") from item.exc
            index, cluster_idx = item
            labels[index] = cluster_idx
            received += 1

    return labels
