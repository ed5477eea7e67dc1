import json

import pytest

from apspx.cli import EXAMPLE_CSV, main


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "graph.csv"
    path.write_text(EXAMPLE_CSV)
    return path


def test_example_prints_csv(capsys):
    assert main(["--example"]) == 0
    assert capsys.readouterr().out == EXAMPLE_CSV


def test_single_query(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "0", "--target", "3"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distance"] == 1
    assert out["path"] == [0, 1, 2, 3]


def test_unreachable_query_prints_nulls(example_file, capsys):
    assert main(["--edges", str(example_file), "--source", "3", "--target", "0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distance"] is None and out["path"] is None


def test_full_matrix_numpy_backend(capsys):
    assert main(["--random", "--n", "6", "--m", "12", "--backend", "numpy"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out["distances"]) == 6
    assert all(out["distances"][i][i] == 0 for i in range(6))


def test_random_negative_dag(capsys):
    assert main(["--random", "--negative", "--n", "8", "--m", "16"]) == 0
    assert json.loads(capsys.readouterr().out)["n"] == 8


def test_exports_and_metrics(example_file, tmp_path, capsys):
    j, c, m = tmp_path / "d.json", tmp_path / "d.csv", tmp_path / "metrics.json"
    rc = main(
        [
            "--edges",
            str(example_file),
            "--export-json",
            str(j),
            "--export-csv",
            str(c),
            "--metrics-out",
            str(m),
        ]
    )
    assert rc == 0
    assert json.loads(j.read_text())["distances"][0][3] == 1
    assert c.read_text().startswith("source,target,distance\n")
    metrics = json.loads(m.read_text())
    assert metrics["n"] == 4 and metrics["m"] == 4
    assert metrics["peak_mib"] is not None


def test_negative_cycle_exit_code(tmp_path, capsys):
    path = tmp_path / "cycle.csv"
    path.write_text("0,1,1\n1,0,-2\n")
    assert main(["--edges", str(path)]) == 65
    assert "negative cycle" in capsys.readouterr().err
    assert main(["--edges", str(path), "--allow-negative-cycles"]) == 0
    assert json.loads(capsys.readouterr().out)["negative_cycle_vertices"] == [0, 1]


@pytest.mark.parametrize(
    "argv",
    [
        ["--edges", "does-not-exist.csv"],
        ["--random", "--source", "0"],
        ["--random", "--n", "3", "--source", "0", "--target", "9"],
    ],
)
def test_input_errors(argv, capsys):
    assert main(argv) == 64
    assert capsys.readouterr().err.startswith("error:")


def test_log_json_goes_to_stdout(example_file, capsys):
    assert main(["--edges", str(example_file), "--log-json"]) == 0
    events = [json.loads(line)["event"] for line in capsys.readouterr().out.splitlines()]
    assert events == ["solve.start", "solve.done", "run"]


def test_profile_report(example_file, tmp_path, capsys):
    prof = tmp_path / "run.prof"
    assert main(["--edges", str(example_file), "--profile", "--profile-out", str(prof)]) == 0
    assert "function calls" in capsys.readouterr().err
    assert prof.exists()


def test_plot(example_file, tmp_path, capsys):
    out = tmp_path / "graph.png"
    assert main(["--edges", str(example_file), "--source", "0", "--target", "3", "--plot", str(out)]) == 0
    assert out.stat().st_size > 0
