import json
import subprocess
import sys

import pytest
from typer.testing import CliRunner

from rbo_metric.cli import _render, app, read_ranking
from rbo_metric.overlap import metrics
from rbo_metric.types.types import DataError

runner = CliRunner()


@pytest.fixture
def permutation_files(ranking_file):
    first = ranking_file("first.txt", ["1", "2", "3"])
    second = ranking_file("second.txt", ["1", "3", "2"])
    return first, second


def test_compare_prints_scores(permutation_files):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second), "-p", "0.9"])

    assert result.exit_code == 0
    assert "RBO(min=0.478, residual=0.477, extrapolated=0.955)" in result.stdout


def test_compare_uses_default_persistence(permutation_files):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second)])

    assert result.exit_code == 0
    assert "extrapolated=0.955" in result.stdout


def test_compare_json_output(permutation_files):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second), "--format", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["persistence"] == 0.9
    assert payload["min"] == pytest.approx(0.477528364, abs=1e-6)
    assert payload["depth_long"] == 3


def test_compare_precision(permutation_files):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second), "--precision", "5"])

    assert result.exit_code == 0
    assert "min=0.47753" in result.stdout


def test_persistence_from_environment(permutation_files, monkeypatch):
    first, second = permutation_files
    monkeypatch.setenv("RBO_PERSISTENCE", "0.5")
    result = runner.invoke(app, ["compare", str(first), str(second), "--format", "json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["persistence"] == 0.5


@pytest.mark.parametrize("p", ["0", "1", "-0.1", "1.5"])
def test_invalid_persistence_exits_without_score(permutation_files, p):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second), "-p", p])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert "RBO(" not in result.output


def test_missing_file_exits(tmp_path, ranking_file):
    first = ranking_file("first.txt", ["a"])
    result = runner.invoke(app, ["compare", str(first), str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "Cannot read ranked list file" in result.output


def test_unknown_format_rejected(permutation_files):
    first, second = permutation_files
    result = runner.invoke(app, ["compare", str(first), str(second), "--format", "xml"])

    assert result.exit_code != 0


def test_empty_files(ranking_file):
    first = ranking_file("first.txt", [])
    second = ranking_file("second.txt", [])
    result = runner.invoke(app, ["compare", str(first), str(second)])

    assert result.exit_code == 0
    assert "RBO(min=0.000, residual=1.000, extrapolated=0.000)" in result.stdout


def test_report_command(permutation_files, tmp_path):
    first, second = permutation_files
    report_path = tmp_path / "reports" / "rbo.html"
    result = runner.invoke(
        app, ["report", str(first), str(second), "--report-path", str(report_path)]
    )

    assert result.exit_code == 0
    assert report_path.exists()
    assert "first.txt vs second.txt" in report_path.read_text()
    assert "Report saved to" in result.stdout


def test_read_ranking_strips_and_skips_blank_lines(tmp_path):
    path = tmp_path / "ranking.txt"
    path.write_text("  alpha \n\nbeta\n   \ngamma")

    assert read_ranking(path) == ["alpha", "beta", "gamma"]


def test_read_ranking_missing_file(tmp_path):
    with pytest.raises(DataError):
        read_ranking(tmp_path / "nope.txt")


def test_cli_module_subprocess(permutation_files, tmp_path):
    """Test CLI compare command via python -m."""
    first, second = permutation_files
    result = subprocess.run(
        [sys.executable, "-m", "rbo_metric.cli", "compare", str(first), str(second)],
        capture_output=True,
        text=True,
        cwd=str(tmp_path),
    )

    assert result.returncode == 0
    assert "RBO(min=0.478" in result.stdout


def test_render_formats():
    result = metrics.rank_biased_overlap(["a", "b"], ["a", "c", "b"], 0.9)
    assert _render(result, "text", 2).startswith("RBO(min=0.37")
    assert json.loads(_render(result, "json", 2))["persistence"] == 0.9
