"""Export and import of parsed data and plot configurations."""

import io
import json
import zipfile
from datetime import datetime

from .parsers.csv_reader import read_delimited
from .types import ParsedData, PlotConfig, TabularData, Technique


SCHEMA_VERSION = "1.0.0"
FORMAT_NAME = "echem-pipeline-export"


def csv_export(data: ParsedData) -> str:
    """Table as CSV text with a header row."""
    return data.to_frame().write_csv()


def json_export(data: ParsedData, plots: list[PlotConfig] | None = None) -> str:
    """ParsedData (and optionally plot configs) as indented JSON."""
    payload = data.to_dict()
    if plots:
        payload["plots"] = [plot.to_dict() for plot in plots]
    return json.dumps(payload, indent=2)


def bundle_export(data: ParsedData, plots: list[PlotConfig] | None = None) -> bytes:
    """Export to a zip file as bytes.

    Contents:
    - data.csv: the table
    - metadata.json: technique, instrument, units and file metadata
    - plots.json: plot configurations (if provided)
    """
    buffer = io.BytesIO()

    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("data.csv", csv_export(data))

        metadata = {
            "schema_version": SCHEMA_VERSION,
            "format": FORMAT_NAME,
            "exported_at": datetime.now().isoformat(),
            "technique": data.technique.value,
            "instrument": data.instrument,
            "columns": data.columns,
            "units": data.units,
            "metadata": data.metadata,
        }
        zf.writestr("metadata.json", json.dumps(metadata, indent=2))

        if plots:
            zf.writestr("plots.json", json.dumps([p.to_dict() for p in plots], indent=2))

    return buffer.getvalue()


def bundle_import(content: bytes) -> tuple[ParsedData, list[dict]]:
    """Import a bundle written by bundle_export.

    Returns:
        Tuple of (parsed data, plot config dicts)
    """
    with zipfile.ZipFile(io.BytesIO(content), "r") as zf:
        metadata = json.loads(zf.read("metadata.json").decode("utf-8"))
        columns, rows = read_delimited(zf.read("data.csv").decode("utf-8"))

        plots = []
        if "plots.json" in zf.namelist():
            plots = json.loads(zf.read("plots.json").decode("utf-8"))

    data = ParsedData(
        technique=Technique(metadata.get("technique", Technique.UNKNOWN.value)),
        instrument=metadata.get("instrument", "Generic"),
        data=TabularData(columns=metadata.get("columns", columns), rows=rows),
        metadata=metadata.get("metadata", {}),
        units=metadata.get("units", {}),
    )
    return data, plots
