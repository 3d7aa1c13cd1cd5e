"""
Configuration for clustering runs.
"""

import math
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Union

import yaml

from .clustering import Bounds, EPSILON, EMPTY_KEEP, EMPTY_RESEED, EMPTY_CLUSTER_POLICIES

__all__ = [
    "ClusterConfig",
    "ConfigError",
    "load_config",
    "DISTRIBUTIONS",
    "DEFAULT_BOUNDS",
]

# Region of the plane where demo points and centroids live
DEFAULT_BOUNDS = Bounds(left=-5.0, right=5.0, bottom=-5.0, top=5.0)

DISTRIBUTIONS = ("uniform", "blobs")

INT_FIELDS = ("num_points", "num_clusters", "num_threads")
OPTIONAL_INT_FIELDS = ("max_iterations", "seed")
FLOAT_FIELDS = ("epsilon", "blob_std", "left", "right", "bottom", "top")


class ConfigError(ValueError):
    """Invalid run configuration, rejected before any computation starts."""


@dataclass
class ClusterConfig:
    """Configuration for a clustering run."""

    # Input
    num_points: int = 1000
    distribution: str = "uniform"  # "uniform" or "blobs"
    blob_std: float = 0.5          # Spread of each blob for "blobs"

    # Clustering
    num_clusters: int = 3
    num_threads: int = 4
    epsilon: float = EPSILON
    max_iterations: Optional[int] = 300  # None = iterate until converged
    empty_cluster_policy: str = EMPTY_KEEP

    # Bounding region
    left: float = DEFAULT_BOUNDS.left
    right: float = DEFAULT_BOUNDS.right
    bottom: float = DEFAULT_BOUNDS.bottom
    top: float = DEFAULT_BOUNDS.top

    # Reproducibility
    seed: Optional[int] = None

    # Output
    verbose: bool = True

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.left, self.right, self.bottom, self.top)

    def _check_types(self) -> None:
        """Reject values of the wrong type, e.g. strings or floats from a YAML file."""
        for name in INT_FIELDS + OPTIONAL_INT_FIELDS:
            value = getattr(self, name)
            if value is None and name in OPTIONAL_INT_FIELDS:
                continue
            # bool is an int subclass but never a count
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        for name in FLOAT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value!r}")

    def validate(self) -> "ClusterConfig":
        """Raise ConfigError describing the first invalid setting."""
        self._check_types()
        if self.num_points < 0:
            raise ConfigError(f"num_points must be >= 0, got {self.num_points}")
        if self.num_clusters < 1:
            raise ConfigError(f"num_clusters must be >= 1, got {self.num_clusters}")
        if self.num_threads < 1:
            raise ConfigError(f"num_threads must be >= 1, got {self.num_threads}")
        if self.left > self.right:
            raise ConfigError(f"left ({self.left}) must not exceed right ({self.right})")
        if self.bottom > self.top:
            raise ConfigError(f"bottom ({self.bottom}) must not exceed top ({self.top})")
        if self.epsilon <= 0:
            raise ConfigError(f"epsilon must be > 0, got {self.epsilon}")
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ConfigError(f"max_iterations must be >= 1 or unset, got {self.max_iterations}")
        if self.empty_cluster_policy not in EMPTY_CLUSTER_POLICIES:
            raise ConfigError(
                f"empty_cluster_policy must be one of {EMPTY_CLUSTER_POLICIES}, "
                f"got {self.empty_cluster_policy!r}"
            )
        # A cluster that stays empty is reseeded every iteration and keeps moving
        if self.empty_cluster_policy == EMPTY_RESEED and self.max_iterations is None:
            raise ConfigError("empty_cluster_policy 'reseed' requires max_iterations")
        if self.distribution not in DISTRIBUTIONS:
            raise ConfigError(
                f"distribution must be one of {DISTRIBUTIONS}, got {self.distribution!r}"
            )
        if self.blob_std <= 0:
            raise ConfigError(f"blob_std must be > 0, got {self.blob_std}")
        return self

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ClusterConfig":
        """Create from dict, filtering out unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def load_config(path: Union[str, Path]) -> ClusterConfig:
    """
    Load a ClusterConfig from a YAML file.

    The file holds a mapping of ClusterConfig field names; missing fields keep
    their defaults.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    return ClusterConfig.from_dict(data)
