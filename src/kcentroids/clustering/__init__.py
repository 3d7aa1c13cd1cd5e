"""
K-means clustering of 2-D points.

Random centroid seeding, parallel nearest-centroid assignment and centroid
recomputation, iterated until the centroids stop moving.
"""

from .models import (
    Point,
    Bounds,
    Cluster,
    squared_distance,
    nearest_cluster_index,
    random_points,
    gaussian_blobs,
)
from .assignment import (
    AssignmentError,
    chunk_points,
    assign_points,
)
from .algorithm import (
    EPSILON,
    EMPTY_KEEP,
    EMPTY_RESEED,
    EMPTY_CLUSTER_POLICIES,
    ClusteringResult,
    ConvergenceDriver,
    cluster_points,
)

__all__ = [
    # Models
    "Point",
    "Bounds",
    "Cluster",
    "squared_distance",
    "nearest_cluster_index",
    "random_points",
    "gaussian_blobs",
    # Assignment
    "AssignmentError",
    "chunk_points",
    "assign_points",
    # Algorithm
    "EPSILON",
    "EMPTY_KEEP",
    "EMPTY_RESEED",
    "EMPTY_CLUSTER_POLICIES",
    "ClusteringResult",
    "ConvergenceDriver",
    "cluster_points",
]
