"""Gamry .DTA file reader."""

import logging
import re

from ..errors import ParseError
from ..types import ParsedData, RawFile
from ..units import parse_float
from .base import BaseReader, fit_row

logger = logging.getLogger(__name__)

# CURVE, ZCURVE, OCVCURVE, optionally numbered (CURVE1, CURVE2, ...)
SECTION_TAG = re.compile(r"^[A-Z]*CURVE\d*(\s|$)")

# Value used for cells that are not numbers
NON_NUMERIC_FILL = 0.0

# Tag prefix of the open-circuit section recorded before the measurement
OCV_PREFIX = "OCV"


def find_data_section(lines: list[str]) -> int | None:
    """Index of the first data-section tag line, or None."""
    for i, line in enumerate(lines):
        if SECTION_TAG.match(line.strip()):
            return i
    return None


def parse_gamry_metadata(lines: list[str]) -> dict[str, str]:
    """Read tab-delimited key/value pairs from the header region."""
    metadata = {}
    for line in lines:
        stripped = line.strip()
        # Skip empty lines and tags
        if not stripped or stripped.startswith("TAG"):
            continue
        if "\t" in stripped:
            parts = stripped.split("\t")
            key = parts[0].strip()
            value = "\t".join(parts[1:]).strip()
            if key:
                metadata[key] = value
    return metadata


def split_sections(lines: list[str]) -> list[tuple[str, list[str]]]:
    """Group lines under the section tag that precedes them.

    Returns:
        [(tag, body_lines), ...]; lines before the first tag are dropped
    """
    sections: list[tuple[str, list[str]]] = []
    for line in lines:
        stripped = line.strip()
        if SECTION_TAG.match(stripped):
            sections.append((stripped.split()[0], []))
        elif sections:
            sections[-1][1].append(line)
    return sections


def read_section(lines: list[str]) -> tuple[list[str], list[list[float]], dict[str, str]]:
    """Read one section: column header, optional units row, numeric rows.

    Returns:
        (columns, rows, units)
    """
    columns: list[str] = []
    rows: list[list[float]] = []
    units: dict[str, str] = {}
    expect_units = False

    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("TAG"):
            continue
        cells = [c.strip() for c in stripped.split("\t")]

        if not columns:
            columns = [c for c in cells if c]
            expect_units = True
            continue

        values = [parse_float(c) for c in cells]
        if expect_units:
            expect_units = False
            if all(v is None for v in values):
                units = {col: unit for col, unit in zip(columns, cells) if unit}
                continue

        row = [v if v is not None else NON_NUMERIC_FILL for v in values]
        rows.append(fit_row(row, len(columns), NON_NUMERIC_FILL))

    return columns, rows, units


def parse_gamry_data(lines: list[str]) -> tuple[list[str], list[list[float]], dict[str, str]]:
    """Read the main data table from the section-tagged region of a file.

    The first CURVE/ZCURVE section is the main table; OCVCURVE is used only
    when nothing else is present. Later sections with the same header (CURVE1,
    CURVE2, ...) are appended, sections with a different header are dropped.

    Returns:
        (columns, rows, units)
    """
    sections = [(tag, *read_section(body)) for tag, body in split_sections(lines)]
    sections = [s for s in sections if s[1]]
    if not sections:
        return [], [], {}

    main = next((s for s in sections if not s[0].startswith(OCV_PREFIX)), sections[0])
    _, columns, _, units = main

    rows = []
    for tag, section_columns, section_rows, _ in sections:
        if section_columns == columns:
            rows.extend(section_rows)
        else:
            logger.debug("Skipping Gamry %s section with columns %s", tag, section_columns)
    return columns, rows, units


class GamryDTAReader(BaseReader):
    """Reads Gamry Framework .DTA exports."""

    extensions = (".dta",)
    instrument = "Gamry"

    def parse(self, file: RawFile) -> ParsedData:
        text = self.decode(file)
        lines = text.splitlines()

        data_start = find_data_section(lines)
        if data_start is None:
            raise ParseError("Invalid Gamry DTA file: no data section found")

        metadata = parse_gamry_metadata(lines[:data_start])
        columns, rows, units = parse_gamry_data(lines[data_start:])
        if not columns:
            raise ParseError("Invalid Gamry DTA file: no column header after data section")

        logger.debug("Gamry %s: %d columns, %d rows", file.name, len(columns), len(rows))
        return self.build(columns, rows, text, metadata=metadata, units=units)
