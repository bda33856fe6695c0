from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


_HEX_CODE = re.compile(r"[0-9a-fA-F]{6}")


def normalise_path(path: str) -> str:
    # gnuplot wants forward slashes, whatever the host uses
    return str(path).replace("\\", "/")


def quote_string(text: str) -> str:
    """
    gnuplot double-quoted string; backslashes, quotes and line breaks are
    escaped so the text cannot end the string or the command.
    """
    escaped = (
        str(text)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return '"' + escaped + '"'


def format_number(value: float) -> str:
    """
    Shortest text for a size value: 1.0 -> "1", 1.5 -> "1.5".
    """
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


class SeriesType(str, Enum):
    LINE = "line"
    POINT = "point"
    YERRORBAR = "yerrorbar"

    @staticmethod
    def from_token(token: str) -> SeriesType:
        t = (token or "").strip().lower()
        for st in SeriesType:
            if t == st.value or t == st.value[0]:
                return st
        raise ValueError(f"Unknown series type: {token!r}")


class ColorKind(str, Enum):
    NAME = "name"
    CODE = "code"


@dataclass(frozen=True)
class Color:
    kind: ColorKind
    value: str

    @staticmethod
    def from_text(text: str) -> Color:
        if _HEX_CODE.fullmatch(text):
            return Color(ColorKind.CODE, text)
        return Color(ColorKind.NAME, text)

    def specifier(self) -> str:
        if self.kind is ColorKind.CODE:
            return f'rgb "#{self.value}"'
        return quote_string(self.value)


@dataclass(frozen=True)
class AxisSpec:
    x: int
    y: int
    error: Optional[int] = None

    def __post_init__(self) -> None:
        for col in (self.x, self.y, self.error):
            if col is not None and col < 1:
                raise ValueError(f"Column indices are 1-based (got {col}).")


@dataclass(frozen=True)
class Series:
    data_file: str
    title: Optional[str] = None
    axes: Tuple[int, int] = (1, 2)
    y_errorbar_column: Optional[int] = None
    series_type: SeriesType = SeriesType.LINE
    line_size: float = 1.0
    color: Color = field(default_factory=lambda: Color.from_text("black"))
    line_type: int = 1

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "data_file", normalise_path(self.data_file))
        object.__setattr__(self, "title", self.title or None)
        object.__setattr__(self, "axes", tuple(self.axes))

        if len(self.axes) != 2 or min(self.axes) < 1:
            raise ValueError(f"axes must be two 1-based columns (got {self.axes!r}).")
        if self.y_errorbar_column is not None and self.y_errorbar_column < 1:
            raise ValueError(f"Error-bar column must be 1-based (got {self.y_errorbar_column}).")
        if self.line_size < 0:
            raise ValueError(f"line_size must be non-negative (got {self.line_size}).")
        if self.line_type < 0:
            raise ValueError(f"line_type must be non-negative (got {self.line_type}).")

    @staticmethod
    def from_axis(
        data_file: str,
        axis: AxisSpec,
        title: Optional[str] = None,
        series_type: SeriesType = SeriesType.LINE,
        line_size: float = 1.0,
        color: Optional[Color] = None,
        line_type: int = 1,
    ) -> Series:
        return Series(
            data_file=data_file,
            title=title,
            axes=(axis.x, axis.y),
            y_errorbar_column=axis.error,
            series_type=series_type,
            line_size=line_size,
            color=color if color is not None else Color.from_text("black"),
            line_type=line_type,
        )

    def using_spec(self) -> str:
        from .series_types import meta_for

        x, y = self.axes
        if meta_for(self.series_type).requires_errorbar_column:
            err = self.y_errorbar_column if self.y_errorbar_column is not None else y + 1
            return f"{x}:{y}:{err}"
        return f"{x}:{y}"

    def title_clause(self) -> str:
        if self.title is None:
            return "notitle"
        return "title " + quote_string(self.title)

    def to_script(self) -> str:
        from .series_types import draw_specifier, style_selector

        return (
            f"{quote_string(self.data_file)} using {self.using_spec()} {self.title_clause()}"
            f" with {draw_specifier(self.series_type, self.line_size)}"
            f" lc {self.color.specifier()}"
            f" {style_selector(self.series_type, self.line_type)}"
        )


@dataclass(frozen=True)
class PlotRequest:
    terminal: str = "pdf"
    font: str = "Times New Roman, 24"
    delimiter: str = r"\t"
    legend_position: str = "above"
    x_label: str = ""
    y_label: str = ""
    series: Tuple[Series, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "series", tuple(self.series))

    @staticmethod
    def legend_from_words(words: Iterable[str]) -> str:
        return " ".join(w for w in words if w)

    def has_titles(self) -> bool:
        return any(s.title for s in self.series)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "terminal": self.terminal,
            "font": self.font,
            "delimiter": self.delimiter,
            "legend_position": self.legend_position,
            "x_label": self.x_label,
            "y_label": self.y_label,
            "series": [
                {
                    "data_file": s.data_file,
                    "title": s.title or "",
                    "axes": list(s.axes),
                    "y_errorbar_column": s.y_errorbar_column,
                    "series_type": s.series_type.value,
                    "line_size": s.line_size,
                    "color": s.color.value,
                    "line_type": s.line_type,
                }
                for s in self.series
            ],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> PlotRequest:
        """
        Build a request from untrusted JSON-like data. Every field goes
        through the same validators as the command line options, so a
        ValidationError is raised before any Series exists.
        """
        # Import here to avoid circular imports at module load
        from .parsing import (
            parse_axis,
            parse_color,
            parse_line_type,
            parse_width,
            validate_delimiter,
            validate_keywords,
        )

        series_d = d.get("series", []) or []

        series: List[Series] = []
        for i, sd in enumerate(series_d):
            where = f"series[{i}]"
            cols = [str(c) for c in sd.get("axes", (1, 2))]
            err = sd.get("y_errorbar_column", None)
            if err not in (None, ""):
                cols.append(str(err))
            axis = parse_axis(":".join(cols), f"{where}.axes")

            series.append(
                Series.from_axis(
                    str(sd["data_file"]),
                    axis,
                    title=str(sd.get("title", "") or ""),
                    series_type=SeriesType.from_token(str(sd.get("series_type", SeriesType.LINE.value))),
                    line_size=parse_width(str(sd.get("line_size", 1)), f"{where}.line_size"),
                    color=parse_color(str(sd.get("color", "black")), f"{where}.color"),
                    line_type=parse_line_type(str(sd.get("line_type", 1)), f"{where}.line_type"),
                )
            )

        return PlotRequest(
            terminal=validate_keywords(str(d.get("terminal", "pdf")), "terminal"),
            font=str(d.get("font", "Times New Roman, 24")),
            delimiter=validate_delimiter(str(d.get("delimiter", r"\t")), "delimiter"),
            legend_position=validate_keywords(str(d.get("legend_position", "above")), "legend_position"),
            x_label=str(d.get("x_label", "")),
            y_label=str(d.get("y_label", "")),
            series=tuple(series),
        )
