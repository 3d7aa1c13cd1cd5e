"""
Test the runner and command line entry point.
"""

import json

import pytest

from kcentroids import ClusterConfig, ClusterRunner, ConfigError
from kcentroids.cli import main
from kcentroids.logger import read_events


def test_runner_is_reproducible():
    """A fixed seed reproduces points and final clusters."""
    config = ClusterConfig(num_points=300, num_clusters=4, seed=17, verbose=False)

    first = ClusterRunner(config).run()
    second = ClusterRunner(config).run()

    assert [c.centroid for c in first.clusters] == [c.centroid for c in second.clusters]
    assert [c.size for c in first.clusters] == [c.size for c in second.clusters]
    assert sum(c.size for c in first.clusters) == 300


def test_runner_blobs():
    config = ClusterConfig(
        num_points=300, num_clusters=3, distribution="blobs",
        blob_std=0.2, seed=5, verbose=False,
    )
    runner = ClusterRunner(config)
    points = runner.generate_points()

    assert len(points) == 300
    assert all(-5.0 <= p.x <= 5.0 and -5.0 <= p.y <= 5.0 for p in points)

    result = runner.run(points)
    assert result.converged


def test_runner_rejects_bad_config():
    with pytest.raises(ConfigError):
        ClusterRunner(ClusterConfig(num_clusters=0))


def test_cli_report(capsys):
    """CLI prints one report line per cluster."""
    print("Testing CLI report...")

    code = main(["-p", "200", "-c", "3", "--seed", "1", "-q"])
    out = capsys.readouterr().out

    assert code == 0
    lines = [line for line in out.splitlines() if line.startswith("Cluster ")]
    assert len(lines) == 3
    assert "has centroid at" in lines[0]
    assert "points" in lines[0]


def test_cli_json(capsys):
    code = main(["-p", "150", "-c", "2", "-t", "8", "--seed", "3", "--json"])
    summary = json.loads(capsys.readouterr().out)

    assert code == 0
    assert summary["num_clusters"] == 2
    assert summary["total_points"] == 150
    assert summary["converged"] is True
    assert [c["index"] for c in summary["clusters"]] == [0, 1]


@pytest.mark.parametrize("argv", [
    ["-p", "10", "-c", "0"],
    ["-p", "10", "-c", "2", "-t", "0"],
    ["-p", "-5", "-c", "2"],
])
def test_cli_config_errors(argv, capsys):
    """Bad settings fail with status 2 before any clustering."""
    code = main(argv)
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err.startswith("Error:")
    assert "Cluster " not in captured.out


def test_cli_malformed_number():
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", "many", "-c", "2"])
    assert excinfo.value.code == 2


def test_cli_config_file_and_log_dir(tmp_path, capsys):
    """Flags override the YAML file; the run log records start and end."""
    config_path = tmp_path / "run.yaml"
    config_path.write_text("num_clusters: 9\nnum_threads: 2\nseed: 11\nverbose: false\n")
    log_dir = tmp_path / "logs"

    code = main([
        "-p", "120", "-c", "4",
        "--config", str(config_path),
        "--log-dir", str(log_dir),
    ])
    out = capsys.readouterr().out

    assert code == 0
    assert len([line for line in out.splitlines() if line.startswith("Cluster ")]) == 4

    events = read_events(log_dir / "run.jsonl")
    assert events[0]["type"] == "run_start"
    assert events[0]["config"]["num_threads"] == 2
    assert events[0]["config"]["num_clusters"] == 4
    assert events[-1]["type"] == "run_end"
    assert any(e["type"] == "iteration" for e in events)


def test_cli_not_converged_warning(capsys):
    code = main(["-p", "500", "-c", "6", "--seed", "2", "--max-iterations", "1", "-q"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Warning: did not converge within 1 iterations" in out


@pytest.mark.parametrize("yaml_text, fragment", [
    ("epsilon: 1e-3\n", "epsilon must be a number"),
    ("num_threads: four\n", "num_threads must be an integer"),
    ("num_threads: 2.5\n", "num_threads must be an integer"),
    ("epsilon: .inf\n", "epsilon must be finite"),
    ("epsilon: .nan\n", "epsilon must be finite"),
])
def test_cli_rejects_bad_yaml_values(tmp_path, capsys, yaml_text, fragment):
    """Wrong-typed or non-finite YAML values exit 2 before clustering."""
    config_path = tmp_path / "run.yaml"
    config_path.write_text(yaml_text)

    code = main(["-p", "50", "-c", "2", "--config", str(config_path), "--json"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err.startswith("Error:")
    assert fragment in captured.err
    assert captured.out == ""
