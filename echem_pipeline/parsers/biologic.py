"""BioLogic EC-Lab readers: .mpt text exports and .mpr binary files."""

import logging
import os
import re
import tempfile

from galvani import BioLogic

from ..errors import ParseError
from ..types import ParsedData, RawFile
from ..units import coerce_cell
from .base import BaseReader, fit_row

logger = logging.getLogger(__name__)

MPT_MAGIC = {"EC-Lab ASCII FILE", "BT-Lab ASCII FILE"}
NB_HEADER_LINES = re.compile(r"Nb header lines\s*:\s*(\d+)\s*$")


def parse_mpt_metadata(lines: list[str]) -> dict:
    """Parse 'key : value' header lines.

    The first free-standing line (no separator) is the technique title that
    EC-Lab writes near the top of every export.
    """
    metadata = {}
    for line in lines:
        content = line.strip()
        if not content:
            continue
        for sep in (" : ", ":"):
            if sep in content:
                key, value = content.split(sep, 1)
                key = key.strip()
                if key and key not in metadata:
                    metadata[key] = value.strip()
                break
        else:
            metadata.setdefault("technique", content)
    return metadata


def parse_mpt_columns(line: str) -> list[str]:
    names = line.rstrip("\r\n").split("\t")
    while names and not names[-1].strip():
        names.pop()
    return [name.strip() or f"empty_column_{i}" for i, name in enumerate(names)]


class BioLogicMPTReader(BaseReader):
    """Reads EC-Lab / BT-Lab ASCII (.mpt) exports."""

    extensions = (".mpt",)
    instrument = "BioLogic"
    encoding = "latin-1"

    def parse(self, file: RawFile) -> ParsedData:
        text = self.decode(file)
        lines = text.splitlines()

        if not lines or lines[0].strip() not in MPT_MAGIC:
            first = lines[0].strip() if lines else ""
            raise ParseError(f"Invalid BioLogic MPT file: bad first line {first!r}")

        match = NB_HEADER_LINES.match(lines[1].strip()) if len(lines) > 1 else None
        if not match:
            raise ParseError("Invalid BioLogic MPT file: missing 'Nb header lines' line")

        nb_headers = int(match.group(1))
        if nb_headers < 3 or nb_headers > len(lines):
            raise ParseError(f"Invalid BioLogic MPT file: bad header line count {nb_headers}")

        header_block = lines[2:nb_headers - 1]
        columns = parse_mpt_columns(lines[nb_headers - 1])
        if not columns:
            raise ParseError("Invalid BioLogic MPT file: no column header line")

        rows = []
        for line in lines[nb_headers:]:
            if not line.strip():
                continue
            cells = line.rstrip("\r\n").split("\t")
            row = [coerce_cell(c, decimal_comma=True) for c in cells]
            rows.append(fit_row(row, len(columns), ""))

        logger.debug("MPT %s: %d columns, %d rows", file.name, len(columns), len(rows))
        return self.build(
            columns,
            rows,
            "\n".join(header_block),
            metadata=parse_mpt_metadata(header_block),
        )


class BioLogicMPRReader(BaseReader):
    """Reads EC-Lab binary (.mpr) files through galvani."""

    extensions = (".mpr",)
    instrument = "BioLogic"

    def parse(self, file: RawFile) -> ParsedData:
        with tempfile.NamedTemporaryFile(suffix=".mpr", delete=False) as tmp:
            tmp.write(file.content)
            tmp_path = tmp.name

        try:
            mpr_data = BioLogic.MPRfile(tmp_path)
        except (ValueError, NotImplementedError, OSError) as e:
            raise ParseError(f"Invalid BioLogic MPR file {file.name}: {e}") from e
        finally:
            os.unlink(tmp_path)

        columns = list(mpr_data.data.dtype.names)
        rows = [
            [float(v) if isinstance(v, (int, float)) else str(v) for v in record]
            for record in mpr_data.data.tolist()
        ]

        metadata = {}
        if getattr(mpr_data, "timestamp", None):
            metadata["timestamp"] = mpr_data.timestamp.isoformat()
        if getattr(mpr_data, "startdate", None):
            metadata["startdate"] = mpr_data.startdate.isoformat()

        logger.debug("MPR %s: %d columns, %d rows", file.name, len(columns), len(rows))
        return self.build(columns, rows, file.name, metadata=metadata)
