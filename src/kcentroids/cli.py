"""
kcentroids CLI - cluster random 2-D points with parallel k-means.

Usage:
    kcentroids -p 1000 -c 3
    kcentroids -p 5000 -c 8 -t 16 --seed 42
    kcentroids -p 600 -c 3 --distribution blobs --json
    kcentroids -p 1000 -c 4 --config run.yaml --log-dir ./logs
"""

import argparse
import json
import sys
from typing import Optional

from .config import ClusterConfig, ConfigError, DISTRIBUTIONS, load_config
from .clustering import EMPTY_CLUSTER_POLICIES
from .logger import RunLogger
from .report import format_report, summarize
from .runner import ClusterRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kcentroids",
        description="K centroids cluster",
    )
    parser.add_argument("-p", "--num-points", type=int, required=True,
                        help="The number of random points to cluster")
    parser.add_argument("-c", "--num-clusters", type=int, required=True,
                        help="The number of clusters to use")
    parser.add_argument("-t", "--num-threads", type=int, default=None,
                        help="The number of threads to use (default: 4)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for point generation and centroid seeding")
    parser.add_argument("--epsilon", type=float, default=None,
                        help="Convergence threshold on the summed centroid change")
    parser.add_argument("--max-iterations", type=int, default=None,
                        help="Iteration cap (0 = no cap)")
    parser.add_argument("--empty-policy", choices=EMPTY_CLUSTER_POLICIES, default=None,
                        help="What to do with clusters that receive no points")
    parser.add_argument("--distribution", choices=DISTRIBUTIONS, default=None,
                        help="How demo points are generated")
    parser.add_argument("--config", help="YAML config file (flags override it)")
    parser.add_argument("--log-dir", help="Write a JSONL run log to this directory")
    parser.add_argument("--json", action="store_true",
                        help="Print the cluster report as JSON")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress progress output")
    return parser


def config_from_args(args: argparse.Namespace) -> ClusterConfig:
    """Build a config from an optional YAML file plus command-line overrides."""
    config = load_config(args.config) if args.config else ClusterConfig()

    config.num_points = args.num_points
    config.num_clusters = args.num_clusters
    if args.num_threads is not None:
        config.num_threads = args.num_threads
    if args.seed is not None:
        config.seed = args.seed
    if args.epsilon is not None:
        config.epsilon = args.epsilon
    if args.max_iterations is not None:
        config.max_iterations = args.max_iterations or None
    if args.empty_policy is not None:
        config.empty_cluster_policy = args.empty_policy
    if args.distribution is not None:
        config.distribution = args.distribution
    if args.quiet or args.json:
        config.verbose = False

    return config.validate()


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger = RunLogger(args.log_dir) if args.log_dir else None
    try:
        result = ClusterRunner(config, logger=logger).run()
    finally:
        if logger:
            logger.close()

    if args.json:
        summary = summarize(result.clusters)
        summary["iterations"] = result.iterations
        summary["converged"] = result.converged
        print(json.dumps(summary, indent=2))
    else:
        for line in format_report(result.clusters):
            print(line)
        if not result.converged:
            print(f"Warning: did not converge within {result.iterations} iterations")

    return 0


if __name__ == "__main__":
    sys.exit(main())
