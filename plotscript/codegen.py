from __future__ import annotations

import os
from typing import List

from .spec import PlotRequest, normalise_path, quote_string


class EmptySeriesError(ValueError):
    """A script was requested for a plot with no series."""


LEGEND_BOX = 'set key box lt 1 lc "black"'


def _header_lines(request: PlotRequest, null_device: str) -> List[str]:
    out: List[str] = []
    out.append("set terminal " + request.terminal + " enhanced font " + quote_string(request.font))
    out.append('set datafile separator "' + request.delimiter + '"')

    if request.has_titles() and request.legend_position:
        out.append("set key " + request.legend_position)
        out.append(LEGEND_BOX)

    # always emitted: an empty label clears a previous one
    out.append("set xlabel " + quote_string(request.x_label))
    out.append("set ylabel " + quote_string(request.y_label))

    # setup phase draws into the null device
    out.append('set output "' + null_device + '"')
    return out


def generate_gnuplot_script(request: PlotRequest, output_path: str, null_device: str = os.devnull) -> str:
    """
    Render a plot request as gnuplot script text.

    The first series is drawn with "plot", the rest with "replot" in order;
    the output is then switched to `output_path` and a final "replot" writes
    the figure. No trailing newline.
    """
    if not request.series:
        raise EmptySeriesError("Cannot generate a script for a plot without series.")

    first, rest = request.series[0], request.series[1:]

    out = _header_lines(request, null_device)
    out.append("")
    out.append("plot " + first.to_script())
    for s in rest:
        out.append("replot " + s.to_script())
    out.append("set output " + quote_string(normalise_path(output_path)))
    out.append("replot")
    return "\n".join(out)
