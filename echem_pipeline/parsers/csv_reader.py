"""Generic delimited-text (.csv, .txt) reader."""

import io
import logging

import polars as pl

from ..classify import CONTENT_SNIPPET_CHARS
from ..errors import ParseError
from ..types import ParsedData, RawFile
from ..units import coerce_cell
from .base import BaseReader

logger = logging.getLogger(__name__)


def read_delimited(text: str, separator: str = ",") -> tuple[list[str], list[list[float | str]]]:
    """Tokenize delimited text with a header row.

    Blank lines and lines starting with '#' are skipped. Every cell is read as
    text and then coerced to a float where it parses as one.
    """
    kept = "\n".join(line for line in text.splitlines() if line.strip())
    if not kept:
        raise ParseError("CSV file is empty: no header row found")

    try:
        df = pl.read_csv(
            io.BytesIO(kept.encode("utf-8")),
            has_header=True,
            separator=separator,
            comment_prefix="#",
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.NoDataError as e:
        raise ParseError(f"CSV file has no header row: {e}") from e
    except pl.exceptions.ComputeError as e:
        raise ParseError(f"Could not tokenize CSV file: {e}") from e

    columns = list(df.columns)
    rows = [[coerce_cell(v) for v in row] for row in df.rows()]
    return columns, rows


class CSVReader(BaseReader):
    """Fallback reader for comma-delimited text with a header row."""

    extensions = (".csv", ".txt")
    instrument = "Generic"
    encoding = "utf-8-sig"

    def parse(self, file: RawFile) -> ParsedData:
        text = self.decode(file)
        columns, rows = read_delimited(text)
        if not columns:
            raise ParseError(f"No columns found in {file.name}")

        logger.debug("CSV %s: %d columns, %d rows", file.name, len(columns), len(rows))
        return self.build(
            columns,
            rows,
            text[:CONTENT_SNIPPET_CHARS],
            metadata={"comments": "Parsed from generic CSV file"},
        )
