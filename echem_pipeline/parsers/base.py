"""Reader interface shared by all file formats."""

from abc import ABC, abstractmethod

from ..classify import classify_technique
from ..types import ParsedData, RawFile, TabularData
from ..units import extract_units


class BaseReader(ABC):
    """A reader claims files by extension and parses them into ParsedData."""

    extensions: tuple[str, ...] = ()
    instrument: str = "Generic"
    encoding: str = "utf-8"

    def can_parse(self, file: RawFile) -> bool:
        """Check if this reader can handle the given file."""
        return file.extension in self.extensions

    @abstractmethod
    def parse(self, file: RawFile) -> ParsedData:
        """Parse the file. Raises ParseError if required structure is missing."""

    def decode(self, file: RawFile) -> str:
        return file.content.decode(self.encoding, errors="ignore")

    def build(
        self,
        columns: list[str],
        rows: list[list[float | str]],
        content: str,
        metadata: dict | None = None,
        units: dict[str, str] | None = None,
    ) -> ParsedData:
        """Classify and assemble the final ParsedData."""
        all_units = extract_units(columns)
        for name, unit in (units or {}).items():
            all_units.setdefault(name, unit)

        return ParsedData(
            technique=classify_technique(columns, content),
            instrument=self.instrument,
            data=TabularData(columns=columns, rows=rows),
            metadata=metadata or {},
            units=all_units,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(extensions={self.extensions!r})"


def fit_row(row: list, width: int, fill) -> list:
    """Pad or truncate a row to exactly width cells."""
    if len(row) >= width:
        return row[:width]
    return row + [fill] * (width - len(row))
