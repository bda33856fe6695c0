from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

import matplotlib
matplotlib.use("Agg")  # must come before font_manager import

from matplotlib import font_manager

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from plotscript.builder import EmptyCycleError, PlotInputs, build_request
from plotscript.codegen import EmptySeriesError, generate_gnuplot_script
from plotscript.export_script import default_output_path
from plotscript.parsing import (
    COLOR_NAMES,
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
from plotscript.series_types import available_series_types, meta_for
from plotscript.spec import PlotRequest, SeriesType

log = logging.getLogger(__name__)


# -----------------------
# Request models
# -----------------------

class ScriptRequest(BaseModel):
    # raw option text, same syntax as the command line
    data_files: List[str] = Field(..., min_length=1)
    output: Optional[str] = None

    axes: List[str] = Field(default_factory=lambda: ["1:2"])
    titles: str = ""
    colors: str = "black"
    series_types: str = "line"
    widths: str = "1"
    line_types: str = "1"

    x_label: str = ""
    y_label: str = ""
    font_size: str = "24"
    delimiter: str = ","
    legend_position: str = "above"
    terminal: str = "pdf"


class PlotRequestBody(BaseModel):
    request: Dict[str, Any]
    output: str


# -----------------------
# App creation
# -----------------------

app = FastAPI(title="Plot Script Service")


# -----------------------
# Middleware: max body size
# -----------------------

class MaxBodySizeMiddleware:
    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> dict:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                body = message.get("body", b"") or b""
                received += len(body)
                if received > self.max_bytes:
                    response = PlainTextResponse("Request body too large", status_code=413)
                    await response(scope, receive, send)
                    return {"type": "http.disconnect"}
            return message

        await self.app(scope, limited_receive, send)


app.add_middleware(MaxBodySizeMiddleware, max_bytes=1_000_000)


# -----------------------
# Middleware: rate limiting
# -----------------------

limiter = Limiter(key_func=get_remote_address, default_limits=["120/minute"])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


# -----------------------
# Helpers
# -----------------------

def _series_types(text: str) -> List[SeriesType]:
    try:
        return [SeriesType.from_token(tok) for tok in split_tokens(text)]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _inputs_from_body(body: ScriptRequest) -> PlotInputs:
    try:
        validate_widths(body.font_size, "font_size")
        return PlotInputs(
            data_files=list(body.data_files),
            axes=[parse_axes(a, "axes") for a in body.axes],
            titles=split_tokens(body.titles) if body.titles else [],
            colors=parse_colors(body.colors, "colors"),
            series_types=_series_types(body.series_types),
            widths=parse_widths(body.widths, "widths"),
            line_types=parse_line_types(body.line_types, "line_types"),
            x_label=body.x_label,
            y_label=body.y_label,
            font_size=float(body.font_size),
            delimiter=validate_delimiter(body.delimiter, "delimiter"),
            legend_position=validate_keywords(body.legend_position, "legend_position"),
            terminal=validate_keywords(body.terminal, "terminal"),
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _render(body: ScriptRequest) -> tuple[str, str, PlotRequest]:
    inputs = _inputs_from_body(body)
    output = body.output or default_output_path(inputs.data_files[0])
    try:
        plot = build_request(inputs)
        return generate_gnuplot_script(plot, output), output, plot
    except (EmptyCycleError, EmptySeriesError) as e:
        raise HTTPException(status_code=400, detail=str(e))


# -----------------------
# Routes
# -----------------------

@app.get("/health")
def health():
    return {"ok": True}


@app.post("/codegen")
@limiter.limit("60/minute")
def codegen(request: Request, req: ScriptRequest):
    script, output, plot = _render(req)
    log.debug("codegen: %d series -> %s", len(plot.series), output)
    return JSONResponse({"script": script, "output": output, "request": plot.to_dict()})


@app.post("/codegen/request")
@limiter.limit("60/minute")
def codegen_request(request: Request, req: PlotRequestBody):
    try:
        plot = PlotRequest.from_dict(req.request)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid request: {type(e).__name__}: {e}")
    try:
        script = generate_gnuplot_script(plot, req.output)
    except EmptySeriesError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse({"script": script, "output": req.output})


@app.post("/export/script")
@limiter.limit("60/minute")
def export_script(request: Request, req: ScriptRequest):
    script, _, _ = _render(req)
    headers = {"Content-Disposition": 'attachment; filename="plot.gplot"'}
    return Response(content=script, media_type="text/plain", headers=headers)


@app.get("/meta/colors")
def meta_colors():
    return JSONResponse(list(COLOR_NAMES))


@app.get("/meta/series-types")
def meta_series_types():
    out = []
    for st in available_series_types():
        m = meta_for(st)
        out.append(
            {
                "value": st.value,
                "label": m.label,
                "draw": m.draw_keyword,
                "size": m.size_keyword,
                "style": m.style_keyword,
                "requires_errorbar_column": m.requires_errorbar_column,
            }
        )
    return JSONResponse(out)


@app.get("/meta/fonts")
def meta_fonts():
    names = sorted({f.name for f in font_manager.fontManager.ttflist if getattr(f, "name", None)})
    return JSONResponse(names)
