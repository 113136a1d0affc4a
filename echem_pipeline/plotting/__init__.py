"""Plot configuration builders."""

from .columns import COLUMN_ROLES, ColumnRole, find_column, require_column
from .configs import (
    DEFAULT_PLOT_TYPES,
    TECHNIQUE_DEFAULTS,
    build_plots,
    create_battery_cycling_plot,
    create_bode_plot,
    create_cv_plot,
    create_generic_plot,
    create_nyquist_plot,
    normalize_negative_imaginary,
)
from .render import to_figure, to_subplots

__all__ = [
    "COLUMN_ROLES",
    "ColumnRole",
    "find_column",
    "require_column",
    "DEFAULT_PLOT_TYPES",
    "TECHNIQUE_DEFAULTS",
    "build_plots",
    "create_battery_cycling_plot",
    "create_bode_plot",
    "create_cv_plot",
    "create_generic_plot",
    "create_nyquist_plot",
    "normalize_negative_imaginary",
    "to_figure",
    "to_subplots",
]
