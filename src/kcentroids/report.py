"""
Cluster report: summary dicts and printable lines for final clusters.
"""

from __future__ import annotations

from typing import Sequence

from .clustering import Cluster


def summarize(clusters: Sequence[Cluster]) -> dict:
    """Get clustering summary for printing or JSON output."""
    return {
        "num_clusters": len(clusters),
        "total_points": sum(c.size for c in clusters),
        "empty_clusters": sum(1 for c in clusters if c.size == 0),
        "clusters": [
            {
                "index": i,
                "centroid": c.centroid.to_dict(),
                "members": c.size,
            }
            for i, c in enumerate(clusters)
        ],
    }


def format_report(clusters: Sequence[Cluster]) -> list[str]:
    return [
        f"Cluster {i} has centroid at ({c.centroid.x:.4f}, {c.centroid.y:.4f}) "
        f"and {c.size} points"
        for i, c in enumerate(clusters)
    ]
