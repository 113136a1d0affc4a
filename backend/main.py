"""FastAPI backend for echem-pipeline. Stateless: every request carries its data."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from echem_pipeline import (
    EchemError,
    __version__,
    build_plots,
    calculate_statistics,
    fit_curve,
    find_peaks,
    parse_bytes,
)
from echem_pipeline.parsers import supported_extensions

logger = logging.getLogger(__name__)

# Limits
MAX_FILE_SIZE_MB = 50

CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


# ============== Lifespan (startup/shutdown) ==============

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Startup: accepting %s (max %d MB)", ", ".join(supported_extensions()), MAX_FILE_SIZE_MB)
    yield
    logger.info("Shutdown")


app = FastAPI(title="Echem Pipeline API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EchemError)
async def echem_error_handler(request: Request, exc: EchemError) -> JSONResponse:
    """Parse, plot and fit failures are client errors with a specific message."""
    logger.warning("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


# ============== Pydantic Models ==============

class FitRequest(BaseModel):
    """Curve fit over paired arrays."""
    x: list[float]
    y: list[float]
    kind: str = "linear"  # linear, polynomial, exponential, logarithmic, power
    order: int = 2  # Polynomial order (1-6)


class StatisticsRequest(BaseModel):
    values: list[float]


class PeaksRequest(BaseModel):
    """Peak search; min_prominence defaults to 10% of the y range."""
    x: list[float]
    y: list[float]
    min_prominence: float | None = None


# ============== Helpers ==============

async def _read_upload(file: UploadFile) -> tuple[bytes, str]:
    content = await file.read()
    filename = file.filename or "unknown"

    file_size_mb = len(content) / (1024 * 1024)
    if file_size_mb > MAX_FILE_SIZE_MB:
        logger.warning("Rejected %s: %.1f MB", filename, file_size_mb)
        raise HTTPException(
            status_code=400,
            detail=f"{filename}: Too large ({file_size_mb:.1f}MB, max {MAX_FILE_SIZE_MB}MB)",
        )
    return content, filename


# ============== Endpoints ==============

@app.get("/api/health")
def health():
    """Health check."""
    return {"status": "ok", "version": __version__, "formats": supported_extensions()}


@app.post("/parse")
async def parse_upload(file: UploadFile = File(...)) -> dict:
    """Parse an instrument file into columns, rows, units and technique."""
    content, filename = await _read_upload(file)
    return parse_bytes(content, filename).to_dict()


@app.post("/plots")
async def plot_upload(
    file: UploadFile = File(...),
    plot_type: str | None = Form(default=None),
    x_column: str | None = Form(default=None),
    y_column: str | None = Form(default=None),
) -> list[dict]:
    """Parse a file and build its plot configurations.

    Without plot_type the default plot for the detected technique is built.
    """
    content, filename = await _read_upload(file)
    parsed = parse_bytes(content, filename)
    plots = build_plots(parsed, plot_type=plot_type, x_column=x_column, y_column=y_column)
    return [plot.to_dict() for plot in plots]


@app.post("/fit")
def fit(request: FitRequest) -> dict:
    """Fit a curve to paired x/y values."""
    return fit_curve(request.x, request.y, kind=request.kind, order=request.order).to_dict()


@app.post("/statistics")
def statistics(request: StatisticsRequest) -> dict:
    """Descriptive statistics of one array."""
    return calculate_statistics(request.values).to_dict()


@app.post("/peaks")
def peaks(request: PeaksRequest) -> list[dict]:
    """Local maxima at or above the prominence threshold."""
    found = find_peaks(request.x, request.y, min_prominence=request.min_prominence)
    return [peak.to_dict() for peak in found]


if __name__ == "__main__":
    import os
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="127.0.0.1", port=port)
