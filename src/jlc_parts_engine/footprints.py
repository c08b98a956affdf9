"""Footprint normalization to JLCPCB package names.

Footprints arrive in one of two notations:

- KiCad: ``kicad:<library>:<footprint>``, e.g.
  ``kicad:Resistor_SMD:R_0603_1608Metric`` or
  ``kicad:Package_SO:SOIC-8_3.9x4.9mm_P1.27mm``
- footprinter shorthand: ``0603``, ``0603cap``, ``soic8``, ``2x4_p2.54``

Both are reduced to the package token the catalog filters on
(``0603``, ``SOIC-8``, ``SOT-23``).
"""

import logging
import re

from .config import KICAD_PREFIX

logger = logging.getLogger(__name__)

# R_0603_1608Metric, C_0805_2012Metric -> imperial chip size
_KICAD_PASSIVE_PATTERN = re.compile(r":[RC]_(\d{4})_")

# SOIC-8_3.9x4.9mm_P1.27mm, SOT-23, SOD-123 -> package family token
_KICAD_PACKAGE_PATTERN = re.compile(r":(SOIC-\d+|SOT-\d+|SOD-\d+|SSOP-\d+|TSSOP-\d+|QFP-\d+|QFN-\d+)")

# Footprinter marks capacitors with "cap" (0603cap); JLCPCB has no such package
_CAPACITOR_MARKER = "cap"

# Connector pitch suffix: 2x4_p2.54
_PITCH_MARKER = "_p"


def kicad_to_footprinter_string(kicad_footprint: str) -> str | None:
    """Extract a footprinter string from a KiCad footprint.

    Examples:
        'kicad:Resistor_SMD:R_0603_1608Metric' -> '0603'
        'kicad:Package_SO:SOIC-8_3.9x4.9mm_P1.27mm' -> 'SOIC-8'
        'kicad:Package_TO_SOT_SMD:SOT-23' -> 'SOT-23'
        'kicad:Connector:Banana_Jack' -> None
    """
    match = _KICAD_PASSIVE_PATTERN.search(kicad_footprint)
    if match:
        return match.group(1)

    match = _KICAD_PACKAGE_PATTERN.search(kicad_footprint)
    if match:
        return match.group(1)

    return None


def footprinter_string_to_package(footprinter_string: str) -> str:
    """Convert a footprinter string to a JLCPCB package name: '0603cap' -> '0603'."""
    return footprinter_string.replace(_CAPACITOR_MARKER, "")


def normalize_footprint(footprint: str | None) -> str | None:
    """Get the JLCPCB package name for a KiCad or footprinter footprint.

    Never raises. KiCad footprints with no recognizable package are returned
    unchanged; the catalog will most likely find nothing for them.
    """
    if not footprint:
        return None

    if footprint.startswith(KICAD_PREFIX):
        footprinter_string = kicad_to_footprinter_string(footprint)
        if footprinter_string:
            return footprinter_string_to_package(footprinter_string)
        logger.warning(f"No package recognized in KiCad footprint, passing through: {footprint!r}")
        return footprint

    return footprinter_string_to_package(footprint)


def parse_pitch(footprint: str | None) -> float | None:
    """Parse connector pitch from a raw footprinter string: '2x4_p2.54' -> 2.54"""
    if not footprint or _PITCH_MARKER not in footprint:
        return None
    raw = footprint.split(_PITCH_MARKER)[1]
    try:
        return float(raw)
    except ValueError:
        logger.debug(f"Unparseable pitch {raw!r} in footprint {footprint!r}")
        return None
