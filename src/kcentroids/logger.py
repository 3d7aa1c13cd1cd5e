"""
Structured logging for clustering runs.

Single JSONL file with typed events for streaming and analysis.

Event types:
- run_start: Config, number of input points
- iteration: Summed centroid change and cluster sizes
- warning: Recoverable conditions (e.g. iteration cap reached)
- run_end: Summary of the final clusters
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Any, Optional


class RunLogger:
    def __init__(self, output_dir: Path):
        """
        Initialize logger for a run.

        Args:
            output_dir: Directory for the log file (created if missing)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.output_dir / "run.jsonl"

        # Open file in append mode
        self.file_handle = open(self.log_file, 'a')

    def _write_event(self, event_type: str, data: dict[str, Any]) -> None:
        """Write typed event to JSONL log."""
        event = {
            "type": event_type,
            "timestamp": datetime.now().isoformat(),
            **data
        }
        self.file_handle.write(json.dumps(event) + '\n')
        self.file_handle.flush()  # Ensure streaming writes

    def log_run_start(self, config: dict[str, Any], num_points: int) -> None:
        """
        Log run initialization.

        Args:
            config: Run configuration parameters
            num_points: Number of points to cluster
        """
        self._write_event("run_start", {
            "config": config,
            "num_points": num_points,
        })

    def log_iteration(self, iteration: int, change: float, cluster_sizes: list[int]) -> None:
        """
        Log one completed assignment + recompute iteration.

        Args:
            iteration: Iteration number (1-based)
            change: Summed squared centroid displacement
            cluster_sizes: Member count per cluster index
        """
        self._write_event("iteration", {
            "iteration": iteration,
            "change": change,
            "cluster_sizes": cluster_sizes,
            "empty_clusters": sum(1 for size in cluster_sizes if size == 0),
        })

    def log_warning(self, message: str, iteration: Optional[int] = None) -> None:
        data = {"message": message}
        if iteration is not None:
            data["iteration"] = iteration

        self._write_event("warning", data)

    def log_run_end(
        self,
        iterations: int,
        converged: bool,
        final_change: float,
        clusters: list[dict],
    ) -> None:
        """
        Log run completion.

        Args:
            iterations: Iterations performed
            converged: Whether the change dropped below epsilon
            final_change: Change of the last iteration
            clusters: Per-cluster summary (index, centroid, members)
        """
        self._write_event("run_end", {
            "iterations": iterations,
            "converged": converged,
            # json has no infinity; happens when no iteration ran
            "final_change": final_change if final_change != float('inf') else None,
            "clusters": clusters,
        })

    def close(self) -> None:
        """Close log file."""
        if hasattr(self, 'file_handle') and self.file_handle:
            self.file_handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def read_events(log_file: Path) -> list[dict]:
    """Read all events from a JSONL run log."""
    events = []
    with open(log_file) as f:
        for line in f:
            line = line.strip()
            if line:
                events.append(json.loads(line))
    return events
