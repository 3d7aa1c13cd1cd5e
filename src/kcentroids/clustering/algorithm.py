"""
Lloyd's algorithm driver.

Core loop: clear memberships → parallel assignment → recompute centroids →
convergence check, repeated until the summed centroid movement drops to epsilon.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .models import Bounds, Cluster, Point, squared_distance
from .assignment import assign_points


EPSILON = 0.05  # threshold on the sum of squared centroid displacements

EMPTY_KEEP = "keep"
EMPTY_RESEED = "reseed"
EMPTY_CLUSTER_POLICIES = (EMPTY_KEEP, EMPTY_RESEED)


@dataclass
class ClusteringResult:
    """Outcome of a clustering run."""

    clusters: list[Cluster]
    iterations: int
    converged: bool
    changes: list[float] = field(default_factory=list)  # summed change per iteration

    @property
    def final_change(self) -> float:
        return self.changes[-1] if self.changes else float('inf')


class ConvergenceDriver:
    """
    Owns the cluster set and iterates it to convergence.

    Clusters are created once with random centroids, mutated in place every
    iteration, and handed back to the caller when the loop ends.
    """

    def __init__(
        self,
        points: Sequence[Point],
        num_clusters: int,
        bounds: Bounds,
        parallelism: int = 4,
        *,
        rng: Optional[np.random.Generator] = None,
        epsilon: float = EPSILON,
        max_iterations: Optional[int] = None,
        empty_cluster_policy: str = EMPTY_KEEP,
        logger=None,  # RunLogger
        verbose: bool = False,
    ):
        """
        Initialize driver and seed the clusters.

        Args:
            points: Points to cluster (never mutated)
            num_clusters: K, at least 1
            bounds: Region for random centroid seeding
            parallelism: Worker threads per assignment phase, at least 1
            rng: Random generator for seeding (fresh unseeded one if omitted)
            epsilon: Convergence threshold on the summed change
            max_iterations: Iteration cap, None for no cap
            empty_cluster_policy: "keep" or "reseed"
            logger: Optional RunLogger for iteration events
            verbose: Print progress
        """
        if num_clusters < 1:
            raise ValueError(f"num_clusters must be >= 1, got {num_clusters}")
        if parallelism < 1:
            raise ValueError(f"parallelism must be >= 1, got {parallelism}")
        if empty_cluster_policy not in EMPTY_CLUSTER_POLICIES:
            raise ValueError(f"Unknown empty cluster policy: {empty_cluster_policy!r}")

        self.points = points
        self.bounds = bounds
        self.parallelism = parallelism
        self.rng = rng if rng is not None else np.random.default_rng()
        self.epsilon = epsilon
        self.max_iterations = max_iterations
        self.empty_cluster_policy = empty_cluster_policy
        self.logger = logger
        self.verbose = verbose

        self.clusters = [Cluster.new_random(bounds, self.rng) for _ in range(num_clusters)]
        self.iteration = 0
        self.changes: list[float] = []

    def step(self) -> float:
        """
        Run one assignment + recompute iteration.

        Returns:
            Summed squared centroid displacement of this iteration
        """
        for cluster in self.clusters:
            cluster.clear_members()

        labels = assign_points(self.points, self.clusters, self.parallelism)

        # Single consumer: only this thread touches memberships
        for point, idx in zip(self.points, labels):
            if not 0 <= idx < len(self.clusters):
                raise RuntimeError(f"Assignment produced out-of-range cluster index {idx}")
            self.clusters[idx].members.append(point)

        change = 0.0
        for cluster in self.clusters:
            if not cluster.members and self.empty_cluster_policy == EMPTY_RESEED:
                change += self._reseed(cluster)
            else:
                change += cluster.recompute_centroid()

        self.iteration += 1
        self.changes.append(change)

        if self.logger:
            self.logger.log_iteration(
                iteration=self.iteration,
                change=change,
                cluster_sizes=[c.size for c in self.clusters],
            )
        if self.verbose:
            print(f"change = {change}")

        return change

    def _reseed(self, cluster: Cluster) -> float:
        old = cluster.centroid
        cluster.centroid = Point.random_within(self.bounds, self.rng)
        return squared_distance(old, cluster.centroid)

    def run(self) -> ClusteringResult:
        """Iterate until converged or the iteration cap is hit."""
        if self.verbose:
            print("Clusters to begin: " + ", ".join(
                f"({c.centroid.x:.4f}, {c.centroid.y:.4f})" for c in self.clusters
            ))

        change = float('inf')
        while change > self.epsilon:
            if self.max_iterations is not None and self.iteration >= self.max_iterations:
                message = f"did not converge within {self.max_iterations} iterations"
                if self.logger:
                    self.logger.log_warning(message, iteration=self.iteration)
                if self.verbose:
                    print(f"Warning: {message} (change = {change})")
                return ClusteringResult(
                    clusters=self.clusters,
                    iterations=self.iteration,
                    converged=False,
                    changes=list(self.changes),
                )
            change = self.step()

        return ClusteringResult(
            clusters=self.clusters,
            iterations=self.iteration,
            converged=True,
            changes=list(self.changes),
        )


def cluster_points(
    points: Sequence[Point],
    k: int,
    bounds: Bounds,
    parallelism: int = 4,
    **options,
) -> list[Cluster]:
    """
    Partition points into k clusters.

    Keyword options are passed through to ConvergenceDriver (rng, epsilon,
    max_iterations, empty_cluster_policy, logger, verbose).

    Returns:
        The k clusters with their final centroids and memberships
    """
    driver = ConvergenceDriver(points, k, bounds, parallelism, **options)
    return driver.run().clusters
