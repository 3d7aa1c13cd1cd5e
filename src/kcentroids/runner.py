"""
Clustering runner.

Core flow: config → points → driver → log/report.
A single seeded generator feeds point generation and centroid seeding, so a fixed
seed reproduces the whole run.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .clustering import (
    ClusteringResult,
    ConvergenceDriver,
    Point,
    gaussian_blobs,
    random_points,
)
from .config import ClusterConfig
from .logger import RunLogger
from .report import summarize


class ClusterRunner:
    """
    Runs a clustering job described by a ClusterConfig.

    Validates the config up front, so bad settings fail before any points are
    generated.
    """

    def __init__(self, config: ClusterConfig, logger: Optional[RunLogger] = None):
        """
        Initialize runner.

        Args:
            config: Configuration (validated here)
            logger: Optional RunLogger for run events
        """
        self.config = config.validate()
        self.logger = logger
        self.rng = np.random.default_rng(config.seed)

    def generate_points(self) -> list[Point]:
        """Generate the demo input described by the config."""
        config = self.config
        if config.distribution == "blobs":
            centers = [
                Point.random_within(config.bounds, self.rng)
                for _ in range(config.num_clusters)
            ]
            return gaussian_blobs(
                config.num_points,
                centers,
                config.blob_std,
                self.rng,
                bounds=config.bounds,
            )
        return random_points(config.num_points, config.bounds, self.rng)

    def run(self, points: Optional[list[Point]] = None) -> ClusteringResult:
        """
        Cluster the given points, or freshly generated ones.

        Returns:
            ClusteringResult with final clusters and convergence info
        """
        config = self.config
        if points is None:
            points = self.generate_points()

        if self.logger:
            self.logger.log_run_start(config.to_dict(), num_points=len(points))

        driver = ConvergenceDriver(
            points,
            config.num_clusters,
            config.bounds,
            config.num_threads,
            rng=self.rng,
            epsilon=config.epsilon,
            max_iterations=config.max_iterations,
            empty_cluster_policy=config.empty_cluster_policy,
            logger=self.logger,
            verbose=config.verbose,
        )
        result = driver.run()

        if self.logger:
            self.logger.log_run_end(
                iterations=result.iterations,
                converged=result.converged,
                final_change=result.final_change,
                clusters=summarize(result.clusters)["clusters"],
            )

        return result
