"""Semantic column roles and fuzzy header matching."""

from dataclasses import dataclass

from ..errors import ColumnNotFoundError
from ..units import clean_column_name


@dataclass(frozen=True)
class ColumnRole:
    """How to recognize a column that plays a role in a plot.

    A header matches if its lower-cased text contains one of `fragments`, or
    its unit-free name equals one of `names`, unless it contains one of
    `excludes`.
    """

    label: str
    fragments: tuple[str, ...] = ()
    names: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    def matches(self, column: str) -> bool:
        lower = column.lower()
        if any(ex in lower for ex in self.excludes):
            return False
        if any(frag in lower for frag in self.fragments):
            return True
        return clean_column_name(column).lower() in self.names


COLUMN_ROLES = {
    "potential": ColumnRole(
        "potential", fragments=("ewe", "potential", "voltage"), names=("vf", "e", "ecell")
    ),
    "current": ColumnRole(
        "current", fragments=("current",), names=("i", "<i>", "im"), excludes=("time", "(z)")
    ),
    "time": ColumnRole("time", fragments=("time",), names=("t",)),
    "z_real": ColumnRole("Re(Z)", fragments=("re(z)", "z'", "zreal"), excludes=("z''",)),
    "z_imag": ColumnRole("Im(Z)", fragments=("-im(z)", "im(z)", "z''", "zimag")),
    "frequency": ColumnRole("frequency", fragments=("freq",)),
    "z_magnitude": ColumnRole("|Z|", fragments=("|z|", "magnitude", "modulus", "zmod")),
    "z_phase": ColumnRole("phase", fragments=("phase", "phi", "zphz")),
    "cycle": ColumnRole("cycle", fragments=("cycle",)),
    "capacity": ColumnRole("capacity", fragments=("capacity", "cap")),
}


def find_column(columns: list[str], role: str) -> str | None:
    """First column in file order that plays the role, or None."""
    matcher = COLUMN_ROLES[role]
    for col in columns:
        if matcher.matches(col):
            return col
    return None


def require_column(columns: list[str], role: str, purpose: str) -> str:
    """Like find_column, but raises ColumnNotFoundError when nothing matches."""
    col = find_column(columns, role)
    if col is None:
        matcher = COLUMN_ROLES[role]
        looked_for = ", ".join(repr(f) for f in matcher.fragments + matcher.names)
        raise ColumnNotFoundError(
            f"Could not find a {matcher.label} column for {purpose} (looked for {looked_for})",
            role=role,
        )
    return col
