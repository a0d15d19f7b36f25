# qubitverse/tests/test_plot_and_cli.py
import io
import numpy as np
from qubitverse import cli
from qubitverse.plot_results import basis_labels, plot_csv, plot_measurements, plot_probabilities

BELL = "n:2\ntype:single\ngateType:H\nqubit:0\ntheta:-1\n@\ntype:cnot\ncontrol:0\ntarget:1\n@\n"

def test_basis_labels():
    assert basis_labels(2) == ["|0>", "|1>"]
    assert basis_labels(8)[5] == "|101>"

def test_plot_probabilities(tmp_path):
    out = plot_probabilities(np.array([0.5, 0, 0, 0.5]), str(tmp_path / "p.png"))
    assert (tmp_path / "p.png").stat().st_size > 0
    assert out.endswith("p.png")

def test_plot_measurements(tmp_path):
    plot_measurements([0, 3, 3, 0, 3], str(tmp_path / "m.png"))
    assert (tmp_path / "m.png").exists()

def test_plot_bench_csv(tmp_path):
    d = tmp_path / "serial"
    d.mkdir()
    csv_path = d / "qubits.csv"
    csv_path.write_text(
        "qubits,depth,backend,threads,gates,wall_ms,hostname,commit,dtype,timestamp\n"
        "2,10,serial,0,20,0.5,h,,complex128,t\n"
        "3,10,serial,0,30,1.5,h,,complex128,t\n"
    )
    written = plot_csv(str(csv_path))
    assert written == [str(d / "runtime_vs_qubits_serial.png")]

def test_cli_prints_report(tmp_path, capsys):
    f = tmp_path / "bell.txt"
    f.write_text("1" + BELL)
    assert cli.main([str(f), "--plot", str(tmp_path / "bell.png")]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-5:] == ["prob", "0=0.5", "1=0", "2=0", "3=0.5"]
    assert (tmp_path / "bell.png").exists()

def test_cli_reads_stdin_and_seeds(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("2" + BELL))
    assert cli.main(["--seed", "5"]) == 0
    first = capsys.readouterr().out
    monkeypatch.setattr("sys.stdin", io.StringIO("2" + BELL))
    cli.main(["--seed", "5"])
    assert capsys.readouterr().out == first

def test_cli_reports_errors(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("n:3"))
    assert cli.main(["--max-qubits", "2"]) == 1
    assert "limit is 2" in capsys.readouterr().err

def test_cli_reports_unreadable_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().err.startswith("error: ")
