from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from .settings import GNUPLOT_EXECUTABLE, GNUPLOT_TIMEOUT, SCRIPT_SUFFIX
from .spec import normalise_path, quote_string

log = logging.getLogger(__name__)


class GnuplotNotFoundError(RuntimeError):
    """The gnuplot executable could not be started."""


def gnuplot_command(executable: str, script_path: str) -> List[str]:
    return [executable, "-e", "load " + quote_string(normalise_path(script_path))]


def run_gnuplot(
    script: str,
    work_dir: Optional[str] = None,
    executable: Optional[str] = None,
    timeout: Optional[float] = None,
) -> int:
    """
    Write `script` to a temporary file in `work_dir` and have gnuplot load it.

    The temporary file is removed afterwards. Returns gnuplot's exit code;
    a timeout raises subprocess.TimeoutExpired.
    """
    exe = executable or GNUPLOT_EXECUTABLE
    wait = timeout if timeout is not None else GNUPLOT_TIMEOUT
    directory = str(Path(work_dir)) if work_dir else None

    fd, tmp_path = tempfile.mkstemp(suffix=SCRIPT_SUFFIX, dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(script)

        cmd = gnuplot_command(exe, tmp_path)
        log.debug("Running %s", cmd)
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=wait)
        except FileNotFoundError as e:
            raise GnuplotNotFoundError(f"Could not run {exe!r}: {e}") from e

        if proc.returncode != 0:
            log.warning("gnuplot exited with %d: %s", proc.returncode, (proc.stderr or "").strip())
        elif proc.stderr:
            log.debug("gnuplot: %s", proc.stderr.strip())
        return proc.returncode
    finally:
        try:
            os.remove(tmp_path)
        except OSError as e:
            log.warning("Could not remove temporary script %s: %s", tmp_path, e)
