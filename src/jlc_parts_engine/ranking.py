"""Candidate ranking: basic parts first, then truncate."""

import logging
from typing import Any

from .config import LCSC_PREFIX, MAX_RESULTS

logger = logging.getLogger(__name__)

# jlcsearch has spelled the basic-library flag several ways across endpoints
BASIC_FLAG_FIELDS = ("is_basic", "isBasic", "basic")


def is_basic(candidate: dict[str, Any]) -> bool:
    """True if the candidate is a JLCPCB basic part (no extended-part fee)."""
    for field in BASIC_FLAG_FIELDS:
        value = candidate.get(field)
        if value is True or (isinstance(value, int) and value == 1):
            return True
    return False


def sort_basic_first(candidates: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Stable sort with basic parts first; catalog order is kept within each group."""
    return sorted(candidates, key=lambda c: not is_basic(c))


def format_reference(candidate: dict[str, Any]) -> str:
    """Format an LCSC part number: {"lcsc": 1234} -> 'C1234'."""
    return f"{LCSC_PREFIX}{candidate['lcsc']}"


def rank_candidates(candidates: list[dict[str, Any]], limit: int = MAX_RESULTS) -> list[str]:
    """Pick the top ``limit`` candidates and return their LCSC part numbers."""
    usable = []
    for candidate in candidates:
        if candidate.get("lcsc") in (None, ""):
            logger.warning(f"Skipping catalog candidate without an lcsc code: {candidate!r}")
            continue
        usable.append(candidate)
    return [format_reference(c) for c in sort_basic_first(usable)[:limit]]
