import pytest

from plotscript.parsing import InvalidColor, InvalidKeyword, InvalidWidth
from plotscript.spec import (
    AxisSpec,
    Color,
    ColorKind,
    PlotRequest,
    Series,
    SeriesType,
    format_number,
    normalise_path,
    quote_string,
)


def test_color_from_text():
    assert Color.from_text("blue") == Color(ColorKind.NAME, "blue")
    assert Color.from_text("99ab55") == Color(ColorKind.CODE, "99ab55")
    # only a full 6-digit match is a code
    assert Color.from_text("99ab551").kind is ColorKind.NAME


def test_color_specifier():
    assert Color(ColorKind.NAME, "red").specifier() == '"red"'
    assert Color(ColorKind.CODE, "0000FF").specifier() == 'rgb "#0000FF"'


def test_normalise_path():
    assert normalise_path("C:\\test\\hoge.csv") == "C:/test/hoge.csv"
    assert normalise_path("data/run.csv") == "data/run.csv"


@pytest.mark.parametrize("value,text", [(1.0, "1"), (1.5, "1.5"), (1.95, "1.95"), (0.0, "0"), (24, "24")])
def test_format_number(value, text):
    assert format_number(value) == text


def test_series_type_from_token():
    assert SeriesType.from_token("line") is SeriesType.LINE
    assert SeriesType.from_token("p") is SeriesType.POINT
    assert SeriesType.from_token("YErrorBar") is SeriesType.YERRORBAR
    with pytest.raises(ValueError):
        SeriesType.from_token("bars")


def test_series_normalises_path_and_title():
    s = Series("C:\\test\\hoge.csv", title="")
    assert s.data_file == "C:/test/hoge.csv"
    assert s.title is None
    assert s.title_clause() == "notitle"
    assert Series("a.csv", title="run 1").title_clause() == 'title "run 1"'


def test_series_rejects_zero_columns():
    with pytest.raises(ValueError):
        Series("a.csv", axes=(0, 2))
    with pytest.raises(ValueError):
        AxisSpec(1, 0)


def test_series_is_immutable():
    s = Series("a.csv")
    with pytest.raises(Exception):
        s.title = "x"


def test_line_series_to_script():
    s = Series("test.csv", axes=(1, 2), series_type=SeriesType.LINE, line_size=1.5,
               color=Color.from_text("red"), line_type=1)
    assert s.to_script() == '"test.csv" using 1:2 notitle with line lw 1.5 lc "red" dt 1'


def test_point_series_to_script():
    s = Series("hoge.csv", axes=(10, 5), series_type=SeriesType.POINT, line_size=1.0,
               color=Color.from_text("afBF55"), line_type=15)
    assert s.to_script() == '"hoge.csv" using 10:5 notitle with point ps 1 lc rgb "#afBF55" pt 15'


def test_yerrorbar_defaults_error_column_to_next_column():
    s = Series("hoge.csv", axes=(10, 5), series_type=SeriesType.YERRORBAR, line_size=1.0,
               color=Color.from_text("afBF55"), line_type=15)
    assert s.to_script() == '"hoge.csv" using 10:5:6 notitle with yerrorbars ps 1 lc rgb "#afBF55" pt 15'


def test_yerrorbar_explicit_error_column():
    s = Series.from_axis("hoge.csv", AxisSpec(10, 5, 11), series_type=SeriesType.YERRORBAR,
                         color=Color.from_text("afBF55"), line_type=15)
    assert s.using_spec() == "10:5:11"


def test_error_column_ignored_for_lines():
    s = Series.from_axis("a.csv", AxisSpec(1, 2, 3))
    assert s.using_spec() == "1:2"


def test_plot_request_defaults():
    r = PlotRequest()
    assert r.terminal == "pdf"
    assert r.font == "Times New Roman, 24"
    assert r.delimiter == "\\t"
    assert r.x_label == "" and r.y_label == ""
    assert r.series == ()


def test_legend_from_words():
    assert PlotRequest.legend_from_words(["left", "top"]) == "left top"


def test_plot_request_dict_round_trip():
    r = PlotRequest(
        delimiter=",",
        legend_position="left top",
        series=[
            Series("a.csv", title="A", axes=(1, 3), series_type=SeriesType.YERRORBAR,
                   y_errorbar_column=5, color=Color.from_text("00FF00"), line_size=2.5, line_type=7),
            Series("b.csv"),
        ],
    )
    assert PlotRequest.from_dict(r.to_dict()) == r


def test_quote_string():
    assert quote_string("plain") == '"plain"'
    assert quote_string('a "b"') == '"a \\"b\\""'
    assert quote_string("C:\\x") == '"C:\\\\x"'
    assert quote_string("one\ntwo") == '"one\\ntwo"'


def test_title_with_quote_stays_inside_string():
    s = Series("a.csv", title='x" lc "red')
    assert s.to_script().startswith('"a.csv" using 1:2 title "x\\" lc \\"red" with line')


def test_from_dict_rejects_injected_color():
    d = {"series": [{"data_file": "a.csv", "color": 'red"\nsystem "ls'}]}
    with pytest.raises(InvalidColor) as exc:
        PlotRequest.from_dict(d)
    assert exc.value.argument == "series[0].color"


def test_from_dict_rejects_bad_width_and_terminal():
    with pytest.raises(InvalidWidth):
        PlotRequest.from_dict({"series": [{"data_file": "a.csv", "line_size": "-1"}]})
    with pytest.raises(InvalidKeyword):
        PlotRequest.from_dict({"terminal": "pdf\nsystem 'ls'", "series": []})
