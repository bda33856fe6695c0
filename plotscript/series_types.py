from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .spec import SeriesType, format_number


@dataclass(frozen=True)
class SeriesMeta:
    label: str

    # "with <draw_keyword> <size_keyword> N"
    draw_keyword: str
    size_keyword: str  # lw for lines, ps for markers

    # dash pattern (dt) for lines, point shape (pt) for markers
    style_keyword: str

    # third "using" column holds the y error
    requires_errorbar_column: bool


SERIES_META: Dict[SeriesType, SeriesMeta] = {
    SeriesType.LINE: SeriesMeta(
        "Line",
        draw_keyword="line",
        size_keyword="lw",
        style_keyword="dt",
        requires_errorbar_column=False,
    ),
    SeriesType.POINT: SeriesMeta(
        "Point",
        draw_keyword="point",
        size_keyword="ps",
        style_keyword="pt",
        requires_errorbar_column=False,
    ),
    SeriesType.YERRORBAR: SeriesMeta(
        "Y error bars",
        draw_keyword="yerrorbars",
        size_keyword="ps",
        style_keyword="pt",
        requires_errorbar_column=True,
    ),
}


def meta_for(series_type: SeriesType) -> SeriesMeta:
    return SERIES_META[series_type]


def available_series_types() -> List[SeriesType]:
    return [st for st in SeriesType if st in SERIES_META]


def draw_specifier(series_type: SeriesType, size: float) -> str:
    m = meta_for(series_type)
    return f"{m.draw_keyword} {m.size_keyword} {format_number(size)}"


def style_selector(series_type: SeriesType, line_type: int) -> str:
    return f"{meta_for(series_type).style_keyword} {int(line_type)}"
