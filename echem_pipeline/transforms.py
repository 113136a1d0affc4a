"""Column extraction and transforms for parsed data.

Transforms return a new ParsedData and add new columns rather than
overwriting existing ones.
"""

import pint

from .errors import ColumnNotFoundError, UnitConversionError
from .types import ParsedData, TabularData, convert_units
from .units import clean_column_name, is_number, unit_for

# Instrument unit spellings that pint does not parse as written
_PINT_ALIASES = {"Ohm": "ohm", "Ohm.cm": "ohm*cm", "deg": "degree", "°C": "degC"}


def _require(data: ParsedData, column: str) -> int:
    if column not in data.columns:
        raise ColumnNotFoundError(f"Column not found in dataset: {column}")
    return data.data.index(column)


def paired_values(data: ParsedData, columns: list[str]) -> list[list[float]]:
    """Values of several columns, keeping only rows where all are numeric.

    Rows are filtered by one shared predicate, so the i-th values of every
    returned list come from the same file row.
    """
    indices = [_require(data, col) for col in columns]
    result: list[list[float]] = [[] for _ in columns]
    for row in data.rows:
        cells = [row[i] for i in indices]
        if all(is_number(c) for c in cells):
            for out, cell in zip(result, cells):
                out.append(float(cell))
    return result


def extract_xy(data: ParsedData, x_column: str, y_column: str) -> tuple[list[float], list[float]]:
    """Paired numeric x/y values for fitting and peak detection."""
    x, y = paired_values(data, [x_column, y_column])
    return x, y


def numeric_column(data: ParsedData, column: str) -> list[float]:
    """Finite numeric values of one column, in row order."""
    (values,) = paired_values(data, [column])
    return values


def to_pint_unit(unit: str) -> str:
    if unit in _PINT_ALIASES:
        return _PINT_ALIASES[unit]
    return unit.replace(".", "*")


def convert_column_units(data: ParsedData, column: str, target_unit: str) -> ParsedData:
    """Convert a column to another unit. Adds a '<name>/<target_unit>' column.

    The source unit comes from the column header annotation.
    """
    idx = _require(data, column)
    source_unit = unit_for(column, data.units)
    if source_unit is None:
        raise UnitConversionError(f"Column {column} has no unit annotation")

    src, dst = to_pint_unit(source_unit), to_pint_unit(target_unit)
    try:
        convert_units(1.0, src, dst)
    except (pint.errors.UndefinedUnitError, pint.errors.DimensionalityError) as e:
        raise UnitConversionError(f"Cannot convert {column} from {source_unit} to {target_unit}: {e}") from e

    name = clean_column_name(column)
    new_col = f"{name}/{target_unit}"
    new_rows = []
    for row in data.rows:
        cell = row[idx]
        if is_number(cell):
            cell = float(convert_units(float(cell), src, dst))
        new_rows.append(list(row) + [cell])

    units = dict(data.units)
    units[new_col] = target_unit
    return _copy_parsed(data, TabularData(columns=data.columns + [new_col], rows=new_rows), units)


def downsample(data: ParsedData, max_points: int = 5000) -> ParsedData:
    """Reduce rows for display (every Nth row). Returns new ParsedData."""
    if max_points < 1:
        raise ValueError("max_points must be at least 1")
    if len(data.rows) <= max_points:
        return data
    step = (len(data.rows) + max_points - 1) // max_points
    rows = [list(r) for r in data.rows[::step]]
    return _copy_parsed(data, TabularData(columns=list(data.columns), rows=rows), dict(data.units))


def _copy_parsed(data: ParsedData, table: TabularData, units: dict[str, str]) -> ParsedData:
    """Helper to create new ParsedData with an updated table."""
    return ParsedData(
        technique=data.technique,
        instrument=data.instrument,
        data=table,
        metadata=dict(data.metadata),
        units=units,
    )
