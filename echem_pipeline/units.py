"""Column header unit annotations and numeric cell coercion."""

import math
import re

# "Voltage (V)" -> ("Voltage", "V")
_PAREN_UNIT = re.compile(r"(.+)\((.+)\)")
_PAREN_SUFFIX = re.compile(r"\s*\([^)]*\)")

# Strict float syntax: no hex, no inf/nan, no trailing garbage
_FLOAT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def extract_units(columns: list[str]) -> dict[str, str]:
    """Extract units from column headers.

    "Ewe/V" -> {"Ewe": "V"} (split on the first "/"), otherwise
    "Voltage (V)" -> {"Voltage": "V"}. Headers matching neither contribute
    nothing.
    """
    units = {}
    for col in columns:
        if "/" in col:
            name, unit = col.split("/", 1)
            if name.strip() and unit.strip():
                units[name.strip()] = unit.strip()
                continue
        match = _PAREN_UNIT.match(col)
        if match:
            units[match.group(1).strip()] = match.group(2).strip()
    return units


def clean_column_name(column: str) -> str:
    """Strip unit annotations from a header: "Voltage (V)" -> "Voltage"."""
    clean = _PAREN_SUFFIX.sub("", column, count=1)
    clean = clean.split("/")[0]
    return clean.strip()


def unit_for(column: str, units: dict[str, str]) -> str | None:
    """Look up the unit of a full header in an extract_units mapping."""
    if column in units:
        return units[column]
    for name, unit in units.items():
        if column.startswith(name) and (
            column[len(name):].lstrip().startswith(("/", "("))
        ):
            return unit
    return None


def parse_float(value: str, decimal_comma: bool = False) -> float | None:
    """Parse a strictly numeric, finite cell. Returns None otherwise."""
    text = value.strip()
    if decimal_comma:
        text = text.replace(",", ".")
    if not _FLOAT.match(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def coerce_cell(value, decimal_comma: bool = False) -> float | str:
    """Best-effort numeric coercion: a float if the cell parses, else the text."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value)
    number = parse_float(text, decimal_comma=decimal_comma)
    return text if number is None else number


def is_number(value) -> bool:
    """True for finite numeric cells (strings never count)."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
