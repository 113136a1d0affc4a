"""
echem_pipeline - Electrochemistry file parsing, plotting and fitting library

Reads instrument files (Gamry .DTA, BioLogic .mpt/.mpr, generic CSV) into a
normalized table, classifies the electrochemical technique, builds
declarative plot configurations and fits curves over selected columns.
Designed for use behind a web API or from notebooks.
"""

__version__ = "0.1.0"

# Types
from .types import (
    Axis,
    FitResult,
    ParsedData,
    PeakResult,
    PlotConfig,
    PlotType,
    RawFile,
    StatisticsResult,
    TabularData,
    Technique,
    Trace,
)

# Errors
from .errors import (
    ColumnNotFoundError,
    EchemError,
    FitError,
    FormatError,
    ParseError,
    PlotConfigError,
    UnitConversionError,
)

# Units and classification
from .units import extract_units, clean_column_name
from .classify import classify_technique

# Parsers
from .parsers import get_reader, parse_file, parse_bytes, load_file

# Plotting
from .plotting import (
    build_plots,
    create_cv_plot,
    create_nyquist_plot,
    create_bode_plot,
    create_battery_cycling_plot,
    create_generic_plot,
)

# Analysis
from .analysis import (
    fit_curve,
    fit_linear,
    fit_polynomial,
    fit_exponential,
    fit_logarithmic,
    fit_power,
    calculate_statistics,
    find_peaks,
    smooth_data,
    calculate_derivative,
    correct_baseline,
)

# Transforms
from .transforms import extract_xy, numeric_column, convert_column_units, downsample

# Export/Import
from .export import csv_export, json_export, bundle_export, bundle_import

__all__ = [
    "__version__",
    # Types
    "Axis",
    "FitResult",
    "ParsedData",
    "PeakResult",
    "PlotConfig",
    "PlotType",
    "RawFile",
    "StatisticsResult",
    "TabularData",
    "Technique",
    "Trace",
    # Errors
    "ColumnNotFoundError",
    "EchemError",
    "FitError",
    "FormatError",
    "ParseError",
    "PlotConfigError",
    "UnitConversionError",
    # Units / classification
    "extract_units",
    "clean_column_name",
    "classify_technique",
    # Parsers
    "get_reader",
    "parse_file",
    "parse_bytes",
    "load_file",
    # Plotting
    "build_plots",
    "create_cv_plot",
    "create_nyquist_plot",
    "create_bode_plot",
    "create_battery_cycling_plot",
    "create_generic_plot",
    # Analysis
    "fit_curve",
    "fit_linear",
    "fit_polynomial",
    "fit_exponential",
    "fit_logarithmic",
    "fit_power",
    "calculate_statistics",
    "find_peaks",
    "smooth_data",
    "calculate_derivative",
    "correct_baseline",
    # Transforms
    "extract_xy",
    "numeric_column",
    "convert_column_units",
    "downsample",
    # Export
    "csv_export",
    "json_export",
    "bundle_export",
    "bundle_import",
]
