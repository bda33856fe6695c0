"""Command line front end: CSV/TSV files in, gnuplot script (and figure) out.

Example:
  plotscript -i run1.csv run2.csv -a 1:2 -a 1:3,1:4 -t "run 1,run 2a,run 2b" \
      -c red,0000FF -s line,point -w 1.5 -x "time [s]" -y "value"
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from . import settings
from .builder import EmptyCycleError, PlotInputs, build_request
from .codegen import generate_gnuplot_script
from .export_script import default_output_path, write_script
from .parsing import (
    ValidationError,
    parse_axes,
    parse_colors,
    parse_line_types,
    parse_widths,
    split_tokens,
    validate_delimiter,
    validate_keywords,
    validate_widths,
)
from .runner import GnuplotNotFoundError, run_gnuplot
from .spec import SeriesType

log = logging.getLogger(__name__)

T = TypeVar("T")


def _option_type(parse: Callable[[str], T]) -> Callable[[str], T]:
    # argparse reports ArgumentTypeError as "argument -a/--axis: <message>"
    def convert(text: str) -> T:
        try:
            return parse(text)
        except ValidationError as e:
            raise argparse.ArgumentTypeError(str(e)) from e

    convert.__name__ = parse.__name__
    return convert


def _parse_series_types(text: str) -> List[SeriesType]:
    out: List[SeriesType] = []
    for tok in split_tokens(text):
        try:
            out.append(SeriesType.from_token(tok))
        except ValueError as e:
            raise argparse.ArgumentTypeError(
                f"{e}; choose from line, point, yerrorbar (or l, p, y)"
            ) from e
    return out


def _parse_font_size(text: str) -> float:
    validate_widths(text, "--fontsize")
    return float(text)


def _flatten(groups: Optional[Sequence[Sequence[T]]], default: List[T]) -> List[T]:
    if not groups:
        return default
    return [v for g in groups for v in g]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="plotscript",
        description="Build a gnuplot script from CSV/TSV columns and render it to PDF.",
    )
    ap.add_argument("-i", "--input", dest="inputs", nargs="+", required=True, metavar="FILE",
                    help="Input data files.")
    ap.add_argument("-o", "--output", default=None,
                    help="Output file name (default: first input with a .pdf suffix).")
    ap.add_argument("-x", "--xlabel", default="", help="x axis label.")
    ap.add_argument("-y", "--ylabel", default="", help="y axis label.")
    ap.add_argument("-a", "--axis", dest="axes", action="append", type=_option_type(parse_axes),
                    metavar="X:Y[:ERR],...",
                    help="Columns to plot for each input file, e.g. 1:2,1:3 (default 1:2). "
                         "Repeat once per input file.")
    ap.add_argument("-t", "--title", dest="titles", action="append", type=split_tokens,
                    help="Comma-separated title of each series (default: no title).")
    ap.add_argument("-c", "--color", dest="colors", action="append", type=_option_type(parse_colors),
                    help="Comma-separated colors: gnuplot color names or 6-digit hex codes (default black).")
    ap.add_argument("-s", "--seriestype", dest="series_types", action="append", type=_parse_series_types,
                    help="Comma-separated series types: line, point, yerrorbar (default line).")
    ap.add_argument("-w", "--width", dest="widths", action="append", type=_option_type(parse_widths),
                    help="Comma-separated line widths / point sizes (default 1).")
    ap.add_argument("-l", "--linetype", dest="line_types", action="append", type=_option_type(parse_line_types),
                    help="Comma-separated dash patterns / point shapes (default 1).")
    ap.add_argument("-f", "--file", dest="script_only", action="store_true",
                    help="Only write the script (<output>.gplot), do not run gnuplot.")
    ap.add_argument("--fontsize", default=settings.DEFAULT_FONT_SIZE, type=_option_type(_parse_font_size),
                    help="Font size of titles, labels etc. (default %(default)s).")
    ap.add_argument("--separator", default=",", type=_option_type(validate_delimiter),
                    help="Data file field separator (default ',').")
    ap.add_argument("--legend", nargs="+", default=["above"], type=_option_type(validate_keywords), metavar="WORD",
                    help="Legend placement keywords, e.g. 'left top' (default above).")
    ap.add_argument("--terminal", default="pdf", type=_option_type(validate_keywords),
                    help="gnuplot terminal (default pdf).")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return ap


def inputs_from_args(args: argparse.Namespace) -> PlotInputs:
    return PlotInputs(
        data_files=list(args.inputs),
        axes=list(args.axes) if args.axes else [parse_axes("1:2")],
        titles=_flatten(args.titles, []),
        colors=_flatten(args.colors, parse_colors("black")),
        series_types=_flatten(args.series_types, [SeriesType.LINE]),
        widths=_flatten(args.widths, [1.0]),
        line_types=_flatten(args.line_types, [1]),
        x_label=args.xlabel,
        y_label=args.ylabel,
        font_family=settings.DEFAULT_FONT_FAMILY,
        font_size=args.fontsize,
        delimiter=args.separator,
        legend_position=" ".join(args.legend),
        terminal=args.terminal,
    )


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    missing = [f for f in args.inputs if not Path(f).is_file()]
    if missing:
        ap.error("input file not found: " + ", ".join(missing))

    output = args.output or default_output_path(args.inputs[0])

    try:
        request = build_request(inputs_from_args(args))
        script = generate_gnuplot_script(request, output)
    except (ValidationError, EmptyCycleError) as e:
        ap.error(str(e))

    log.debug("Generated script:\n%s", script)

    if args.script_only:
        path = write_script(script, output)
        print(path)
        return 0

    work_dir = str(Path(args.inputs[0]).parent)
    try:
        code = run_gnuplot(script, work_dir=work_dir)
    except GnuplotNotFoundError as e:
        log.error("%s", e)
        return 127
    except subprocess.TimeoutExpired as e:
        log.error("gnuplot did not finish within %s seconds", e.timeout)
        return 124
    if code == 0:
        log.info("Wrote %s", output)
    return code


if __name__ == "__main__":
    sys.exit(main())
