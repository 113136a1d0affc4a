"""Technique classification from column headers and file content.

Rules are checked in order and the first match wins. CV and EIS come before
the battery/CA/CP rules because "time" or "current" alone are weak signals.
"""

import logging
import re
from typing import Callable

from .types import Technique
from .units import clean_column_name

logger = logging.getLogger(__name__)

# Characters of raw text handed to the classifier by text readers
CONTENT_SNIPPET_CHARS = 1000

# Clean header names that denote a current column on their own
CURRENT_NAMES = {"i", "<i>"}

Predicate = Callable[[list[str], str], bool]


def _any_header(headers: list[str], *fragments: str) -> bool:
    return any(frag in h for h in headers for frag in fragments)


def _has_word(content: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", content) is not None


def _is_current_header(header: str) -> bool:
    return "current" in header or clean_column_name(header) in CURRENT_NAMES


def is_cv(headers: list[str], content: str) -> bool:
    if any("ewe" in h and "i" in h for h in headers):
        return True
    if _any_header(headers, "ewe") and any(_is_current_header(h) for h in headers):
        return True
    return "cyclic voltammetry" in content or _has_word(content, "cv")


def is_eis(headers: list[str], content: str) -> bool:
    if _any_header(headers, "re(z)", "im(z)", "freq"):
        return True
    return "impedance" in content or _has_word(content, "eis")


def is_battery_cycling(headers: list[str], content: str) -> bool:
    if _any_header(headers, "cycle", "capacity", "charge"):
        return True
    return "battery" in content or "cycling" in content


def is_ca(headers: list[str], content: str) -> bool:
    return (
        _any_header(headers, "time")
        and _any_header(headers, "current")
        and "chronoamperometry" in content
    )


def is_cp(headers: list[str], content: str) -> bool:
    return (
        _any_header(headers, "time")
        and _any_header(headers, "potential")
        and "chronopotentiometry" in content
    )


RULES: list[tuple[Predicate, Technique]] = [
    (is_cv, Technique.CV),
    (is_eis, Technique.EIS),
    (is_battery_cycling, Technique.BATTERY_CYCLING),
    (is_ca, Technique.CA),
    (is_cp, Technique.CP),
]


def classify_technique(headers: list[str], content: str = "") -> Technique:
    """Label a dataset with a technique.

    Args:
        headers: Column headers in file order
        content: Raw text to search for technique names (any case)

    Returns:
        The first matching Technique, or Technique.UNKNOWN
    """
    headers_lower = [h.lower() for h in headers]
    content_lower = (content or "").lower()

    for predicate, technique in RULES:
        if predicate(headers_lower, content_lower):
            logger.debug("Classified as %s by %s", technique.value, predicate.__name__)
            return technique
    return Technique.UNKNOWN
