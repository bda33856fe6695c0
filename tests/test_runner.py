import subprocess
from pathlib import Path

import pytest

from plotscript import runner
from plotscript.runner import GnuplotNotFoundError, gnuplot_command, run_gnuplot


def test_gnuplot_command_uses_load_with_forward_slashes():
    assert gnuplot_command("gnuplot", "C:\\tmp\\x.gplot") == ["gnuplot", "-e", 'load "C:/tmp/x.gplot"']


def test_run_gnuplot_loads_temp_script_and_removes_it(tmp_path: Path, monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        path = cmd[2][len('load "'):-1]
        seen["cmd"] = cmd
        seen["path"] = Path(path)
        seen["text"] = Path(path).read_text(encoding="utf-8")
        seen["timeout"] = kwargs.get("timeout")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    code = run_gnuplot("plot sin(x)", work_dir=str(tmp_path), executable="gp", timeout=5)

    assert code == 0
    assert seen["cmd"][:2] == ["gp", "-e"]
    assert seen["text"] == "plot sin(x)"
    assert seen["path"].parent == tmp_path
    assert seen["timeout"] == 5
    assert not seen["path"].exists()


def test_run_gnuplot_returns_failure_code(tmp_path: Path, monkeypatch, caplog):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="line 1: undefined variable")

    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    with caplog.at_level("WARNING", logger="plotscript.runner"):
        assert run_gnuplot("plot", work_dir=str(tmp_path)) == 1
    assert "undefined variable" in caplog.text
    assert list(tmp_path.iterdir()) == []


def test_run_gnuplot_missing_executable(tmp_path: Path, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    with pytest.raises(GnuplotNotFoundError):
        run_gnuplot("plot", work_dir=str(tmp_path), executable="no-such-gnuplot")
    assert list(tmp_path.iterdir()) == []
