"""Readers for electrochemistry file formats."""

import logging
import os

from ..errors import FormatError
from ..types import ParsedData, RawFile
from .base import BaseReader
from .biologic import BioLogicMPRReader, BioLogicMPTReader
from .csv_reader import CSVReader
from .gamry import GamryDTAReader

logger = logging.getLogger(__name__)

# Specific formats first, generic CSV last
READERS: list[BaseReader] = [
    GamryDTAReader(),
    BioLogicMPTReader(),
    BioLogicMPRReader(),
    CSVReader(),
]


def get_reader(file: RawFile) -> BaseReader:
    """Return the first reader that claims the file.

    Raises:
        FormatError: If no reader supports the file
    """
    for reader in READERS:
        if reader.can_parse(file):
            return reader
    raise FormatError(f"Unsupported file format: {file.name}")


def supported_extensions() -> list[str]:
    return [ext for reader in READERS for ext in reader.extensions]


def parse_file(file: RawFile) -> ParsedData:
    """Parse an uploaded file, auto-detecting format by extension.

    Supported formats:
    - .dta: Gamry
    - .mpt: BioLogic (text export)
    - .mpr: BioLogic (binary)
    - .csv, .txt: generic delimited text

    Raises:
        FormatError: If no reader supports the file
        ParseError: If the file lacks the structure its reader needs
    """
    reader = get_reader(file)
    logger.debug("Parsing %s with %s", file.name, type(reader).__name__)
    parsed = reader.parse(file)
    logger.info(
        "Parsed %s: %s, %d columns, %d rows",
        file.name,
        parsed.technique.value,
        len(parsed.columns),
        len(parsed.rows),
    )
    return parsed


def parse_bytes(content: bytes, filename: str) -> ParsedData:
    """Parse file contents; filename is used for format detection."""
    return parse_file(RawFile(name=filename, content=content))


def load_file(file_path: str) -> ParsedData:
    """Read a file from disk and parse it."""
    with open(file_path, "rb") as f:
        content = f.read()
    return parse_bytes(content, os.path.basename(file_path))


__all__ = [
    "READERS",
    "BaseReader",
    "GamryDTAReader",
    "BioLogicMPTReader",
    "BioLogicMPRReader",
    "CSVReader",
    "get_reader",
    "supported_extensions",
    "parse_file",
    "parse_bytes",
    "load_file",
]
