from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .spec import AxisSpec, Color


class ValidationError(ValueError):
    """
    A raw option value was rejected before any series was built.
    `argument` names the option, `token` the offending comma-separated item.
    """

    reason = "invalid value"

    def __init__(self, token: str, argument: Optional[str] = None) -> None:
        self.token = token
        self.argument = argument
        where = f" in {argument}" if argument else ""
        super().__init__(f"{self.reason}{where}: {token!r}")


class InvalidAxisFormat(ValidationError):
    reason = "axes format is invalid (expected x:y or x:y:err, 1-based)"


class InvalidColor(ValidationError):
    reason = "invalid color (expected a color name or a 6-digit hex code)"


class InvalidWidth(ValidationError):
    reason = "width value is not a non-negative number"


class InvalidLineType(ValidationError):
    reason = "line type is not a non-negative integer"


class InvalidKeyword(ValidationError):
    reason = "not a plain gnuplot keyword list"


class InvalidDelimiter(ValidationError):
    reason = "separator must be one character or a backslash escape"


_AXES_TOKEN = re.compile(r"[1-9]\d*:[1-9]\d*(?::[1-9]\d*)?")
_HEX_TOKEN = re.compile(r"[0-9a-fA-F]{6}")
_WIDTH_TOKEN = re.compile(r"(?:[1-9][0-9]*|0)(?:\.[0-9]+)?")  # literal dot only
_LINETYPE_TOKEN = re.compile(r"\d+")
# unquoted in the script: no quotes, newlines or semicolons
_KEYWORDS = re.compile(r"[A-Za-z0-9_.,:+\- ]*")
_DELIMITER = re.compile(r"\\[a-z]|[^\"\\\r\n]")


# gnuplot named colors ("show colornames")
COLOR_NAMES: Tuple[str, ...] = (
    "white", "black", "dark-grey", "red", "web-green", "web-blue",
    "dark-magenta", "dark-cyan", "dark-orange", "dark-yellow", "royalblue",
    "goldenrod", "dark-spring-green", "purple", "steelblue", "dark-red",
    "dark-chartreuse", "orchid", "aquamarine", "brown", "yellow", "turquoise",
    "grey0", "grey10", "grey20", "grey30", "grey40", "grey50", "grey60",
    "grey70", "grey", "grey80", "grey90", "grey100",
    "light-red", "light-green", "light-blue", "light-magenta", "light-cyan",
    "light-goldenrod", "light-pink", "light-turquoise", "gold", "green",
    "dark-green", "spring-green", "forest-green", "sea-green", "blue",
    "dark-blue", "midnight-blue", "navy", "medium-blue", "skyblue", "cyan",
    "magenta", "dark-turquoise", "dark-pink", "coral", "light-coral",
    "orange-red", "salmon", "dark-salmon", "khaki", "dark-khaki",
    "dark-goldenrod", "beige", "olive", "orange", "violet", "dark-violet",
    "plum", "dark-plum", "dark-olivegreen", "orangered4", "brown4", "sienna4",
    "orchid4", "mediumpurple3", "slateblue1", "yellow4", "sienna1", "tan1",
    "sandybrown", "light-salmon", "pink", "khaki1", "lemonchiffon", "bisque",
    "honeydew", "slategrey", "seagreen", "antiquewhite", "chartreuse",
    "greenyellow", "gray", "light-gray", "light-grey", "dark-gray",
    "slategray", "gray0", "gray10", "gray20", "gray30", "gray40", "gray50",
    "gray60", "gray70", "gray80", "gray90", "gray100",
)


def split_tokens(text: str) -> List[str]:
    """
    Split one raw option value on commas. Tokens are kept verbatim, so
    "1:2, 3:4" fails validation on " 3:4".
    """
    return (text or "").split(",")


def is_color_token(token: str) -> bool:
    return bool(_HEX_TOKEN.fullmatch(token)) or token in COLOR_NAMES


def parse_axis(token: str, argument: Optional[str] = None) -> AxisSpec:
    """
    "1:3:4" -> AxisSpec(1, 3, 4)
    """
    if not _AXES_TOKEN.fullmatch(token):
        raise InvalidAxisFormat(token, argument)
    cols = [int(c) for c in token.split(":")]
    return AxisSpec(cols[0], cols[1], cols[2] if len(cols) > 2 else None)


def parse_color(token: str, argument: Optional[str] = None) -> Color:
    if not is_color_token(token):
        raise InvalidColor(token, argument)
    return Color.from_text(token)


def parse_width(token: str, argument: Optional[str] = None) -> float:
    if not _WIDTH_TOKEN.fullmatch(token):
        raise InvalidWidth(token, argument)
    return float(token)


def parse_line_type(token: str, argument: Optional[str] = None) -> int:
    if not _LINETYPE_TOKEN.fullmatch(token):
        raise InvalidLineType(token, argument)
    return int(token)


def parse_axes(text: str, argument: Optional[str] = None) -> List[AxisSpec]:
    return [parse_axis(tok, argument) for tok in split_tokens(text)]


def parse_colors(text: str, argument: Optional[str] = None) -> List[Color]:
    return [parse_color(tok, argument) for tok in split_tokens(text)]


def parse_widths(text: str, argument: Optional[str] = None) -> List[float]:
    return [parse_width(tok, argument) for tok in split_tokens(text)]


def parse_line_types(text: str, argument: Optional[str] = None) -> List[int]:
    return [parse_line_type(tok, argument) for tok in split_tokens(text)]


def validate_axes(text: str, argument: Optional[str] = None) -> None:
    parse_axes(text, argument)


def validate_colors(text: str, argument: Optional[str] = None) -> None:
    parse_colors(text, argument)


def validate_widths(text: str, argument: Optional[str] = None) -> None:
    parse_widths(text, argument)


def validate_line_types(text: str, argument: Optional[str] = None) -> None:
    parse_line_types(text, argument)


def validate_keywords(text: str, argument: Optional[str] = None) -> str:
    """Terminal names and legend placement go into the script unquoted."""
    if not _KEYWORDS.fullmatch(text):
        raise InvalidKeyword(text, argument)
    return text


def validate_delimiter(text: str, argument: Optional[str] = None) -> str:
    if not _DELIMITER.fullmatch(text):
        raise InvalidDelimiter(text, argument)
    return text
