"""Error types for echem_pipeline.

Every failure raised by the library derives from EchemError so callers can
report the message and carry on with the next file, plot or fit.
"""


class EchemError(Exception):
    """Base class for all echem_pipeline errors."""


class FormatError(EchemError):
    """No reader claims the file."""


class ParseError(EchemError):
    """A claimed file is missing structure the reader requires."""


class PlotConfigError(EchemError):
    """A plot configuration could not be built."""


class ColumnNotFoundError(PlotConfigError):
    """A column required for a plot or extraction is not in the dataset."""

    def __init__(self, message: str, role: str | None = None):
        super().__init__(message)
        self.role = role


class FitError(EchemError):
    """Input to a fit, statistic or peak search is numerically invalid."""


class UnitConversionError(EchemError):
    """A column has no unit annotation or cannot be converted to the target unit."""
