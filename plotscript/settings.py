"""Runtime configuration for the command line tool and the gnuplot runner."""

from __future__ import annotations

import os
import sys
from typing import Final, Optional


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


GNUPLOT_EXECUTABLE: Final = os.environ.get("PLOTSCRIPT_GNUPLOT", "gnuplot")
GNUPLOT_TIMEOUT: Final = _env_float("PLOTSCRIPT_GNUPLOT_TIMEOUT")  # seconds, None waits forever
LOG_LEVEL: Final = os.environ.get("PLOTSCRIPT_LOG_LEVEL", "WARNING").upper()

DEFAULT_FONT_FAMILY: Final = "Times New Roman"
DEFAULT_FONT_SIZE: Final = "24" if sys.platform == "darwin" else "12"

DEFAULT_OUTPUT_SUFFIX: Final = ".pdf"
SCRIPT_SUFFIX: Final = ".gplot"
