"""
kcentroids - k-means clustering of 2-D points with a parallel assignment phase.
"""

from .config import ClusterConfig, ConfigError, load_config
from .runner import ClusterRunner

__all__ = ["ClusterConfig", "ConfigError", "load_config", "ClusterRunner"]
