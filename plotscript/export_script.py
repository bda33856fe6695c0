from __future__ import annotations

import logging
from pathlib import Path

from .settings import DEFAULT_OUTPUT_SUFFIX, SCRIPT_SUFFIX

log = logging.getLogger(__name__)


def _replace_suffix(path: str, suffix: str) -> str:
    p = Path(path)
    if not p.suffix:
        return path + suffix if p.name else path
    return str(p.with_suffix(suffix))


def default_output_path(first_input: str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """data/run1.csv -> data/run1.pdf"""
    return _replace_suffix(first_input, suffix)


def script_path_for(output_path: str) -> str:
    return _replace_suffix(output_path, SCRIPT_SUFFIX)


def write_script(script: str, output_path: str) -> str:
    """
    Writes ONE file next to the figure it describes:
      <output-stem>.gplot

    Returns the path written.
    """
    target = Path(script_path_for(output_path))
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(script, encoding="utf-8")
    log.info("Wrote gnuplot script to %s", target)
    return str(target)
