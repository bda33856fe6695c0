from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, TypeVar

from .spec import AxisSpec, Color, PlotRequest, Series, SeriesType, format_number

T = TypeVar("T")


class EmptyCycleError(ValueError):
    """A per-series attribute list used for recycling was empty."""


@dataclass(frozen=True)
class PlotInputs:
    """
    Already-parsed option values for one plot.

    `axes` holds one group of axis specs per data file. Colors, series types,
    widths and line types are recycled (index modulo length) over the
    series; a single value applies to every series. Titles are not recycled:
    series past the end of `titles` stay untitled.
    """

    data_files: Sequence[str]
    axes: Sequence[Sequence[AxisSpec]] = field(default_factory=lambda: [[AxisSpec(1, 2)]])
    titles: Sequence[str] = ()
    colors: Sequence[Color] = field(default_factory=lambda: [Color.from_text("black")])
    series_types: Sequence[SeriesType] = (SeriesType.LINE,)
    widths: Sequence[float] = (1.0,)
    line_types: Sequence[int] = (1,)

    x_label: str = ""
    y_label: str = ""
    font_family: str = "Times New Roman"
    font_size: float = 24.0
    delimiter: str = ","
    legend_position: str = "above"
    terminal: str = "pdf"

    @property
    def font(self) -> str:
        return f"{self.font_family}, {format_number(self.font_size)}"


def cycled(values: Sequence[T], index: int, name: str) -> T:
    if not values:
        raise EmptyCycleError(f"No {name} given; at least one value is required.")
    return values[index % len(values)]


def series_targets(inputs: PlotInputs) -> List[Tuple[str, AxisSpec]]:
    """
    (data file, axis spec) pairs in plot order. Axis groups are recycled
    over the data files the same way as the other attributes.
    """
    if not inputs.data_files:
        raise EmptyCycleError("No data files given; at least one is required.")

    out: List[Tuple[str, AxisSpec]] = []
    for i, data_file in enumerate(inputs.data_files):
        group = cycled(inputs.axes, i, "axes")
        if not group:
            raise EmptyCycleError(f"Axis group for {data_file!r} is empty.")
        for ax in group:
            out.append((data_file, ax))
    return out


def build_series(inputs: PlotInputs) -> List[Series]:
    sers: List[Series] = []
    for k, (data_file, ax) in enumerate(series_targets(inputs)):
        title = inputs.titles[k] if k < len(inputs.titles) else ""
        sers.append(
            Series.from_axis(
                data_file,
                ax,
                title=title,
                series_type=cycled(inputs.series_types, k, "series types"),
                line_size=cycled(inputs.widths, k, "widths"),
                color=cycled(inputs.colors, k, "colors"),
                line_type=cycled(inputs.line_types, k, "line types"),
            )
        )
    return sers


def build_request(inputs: PlotInputs) -> PlotRequest:
    return PlotRequest(
        terminal=inputs.terminal,
        font=inputs.font,
        delimiter=inputs.delimiter,
        legend_position=inputs.legend_position,
        x_label=inputs.x_label,
        y_label=inputs.y_label,
        series=tuple(build_series(inputs)),
    )
