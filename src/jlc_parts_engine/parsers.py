"""Parsers for electronic component values.

Source components may carry electrical values as strings with SI suffixes
("10k", "100nF", "16MHz"). These parsers convert them to base SI units:

- Resistance: ohms
- Capacitance: farads
- Inductance: henries
- Frequency: hertz
- Voltage: volts
"""

import re
from typing import Any, Callable


# Pre-compiled patterns
_VOLTAGE_KV_PATTERN = re.compile(r"([\d.]+)\s*kV", re.IGNORECASE)
_VOLTAGE_MV_PATTERN = re.compile(r"([\d.]+)\s*mV")
_VOLTAGE_PATTERN = re.compile(r"([\d.]+)\s*V?", re.IGNORECASE)
_RESISTANCE_PATTERN = re.compile(r"([\d.]+)\s*([kKmM])?")
# European notation: 4k7 = 4.7k, 4R7 = 4.7Ω, 1M5 = 1.5M (suffix replaces decimal point)
_RESISTANCE_EURO_PATTERN = re.compile(r"(\d+)([kKrR])(\d+)|(\d+)(M)(\d+)", re.IGNORECASE)
_CAPACITANCE_PATTERN = re.compile(r"([\d.]+)\s*([pnuµm])?", re.IGNORECASE)
_INDUCTANCE_PATTERN = re.compile(r"([\d.]+)\s*([nuµm])?", re.IGNORECASE)
_FREQUENCY_PATTERN = re.compile(r"([\d.]+)\s*([kKmMgG])?")


def _to_float(s: str) -> float | None:
    try:
        return float(s)
    except ValueError:
        return None


def parse_resistance(s: str) -> float | None:
    """Parse resistance in ohms: '10k' -> 10000, '4.7MΩ' -> 4700000, '4k7' -> 4700

    Milliohms need an explicit 'mΩ' or 'mohm' ('17mΩ' -> 0.017); a bare 'm'
    or 'M' is mega.
    """
    if not s:
        return None

    is_milliohm = "mΩ" in s or "mohm" in s.lower()
    s_clean = s.replace("Ω", "").replace("ohm", "").replace("Ohm", "").strip()

    if not is_milliohm:
        euro_match = _RESISTANCE_EURO_PATTERN.search(s_clean)
        if euro_match:
            if euro_match.group(1) is not None:
                int_part, suffix, frac_part = euro_match.group(1, 2, 3)
            else:
                int_part, suffix, frac_part = euro_match.group(4, 5, 6)
            value = float(f"{int_part}.{frac_part}")
            suffix = suffix.upper()
            if suffix == "K":
                return value * 1000
            if suffix == "M":
                return value * 1_000_000
            return value

    if s_clean.upper() == "0R":
        return 0.0

    match = _RESISTANCE_PATTERN.search(s_clean)
    if not match:
        return None
    value = _to_float(match.group(1))
    if value is None:
        return None

    if is_milliohm:
        return value / 1000

    suffix = (match.group(2) or "").upper()
    if suffix == "K":
        return value * 1000
    elif suffix == "M":
        return value * 1_000_000
    return value


def parse_capacitance(s: str) -> float | None:
    """Parse capacitance in farads: '100nF' -> 1e-7, '10uF' -> 1e-5, '1pF' -> 1e-12"""
    if not s:
        return None
    s = s.replace("F", "").strip()
    match = _CAPACITANCE_PATTERN.search(s)
    if not match:
        return None
    value = _to_float(match.group(1))
    if value is None:
        return None
    suffix = (match.group(2) or "").lower()
    if suffix == "p":
        return value * 1e-12
    elif suffix == "n":
        return value * 1e-9
    elif suffix in ("u", "µ"):
        return value * 1e-6
    elif suffix == "m":
        return value * 1e-3
    return value  # Assume farads if no suffix


def parse_inductance(s: str) -> float | None:
    """Parse inductance in henries: '10uH' -> 1e-5, '100nH' -> 1e-7, '1mH' -> 1e-3"""
    if not s:
        return None
    s = s.replace("H", "").strip()
    match = _INDUCTANCE_PATTERN.search(s)
    if not match:
        return None
    value = _to_float(match.group(1))
    if value is None:
        return None
    suffix = (match.group(2) or "").lower()
    if suffix == "n":
        return value * 1e-9
    elif suffix in ("u", "µ"):
        return value * 1e-6
    elif suffix == "m":
        return value * 1e-3
    return value


def parse_frequency(s: str) -> float | None:
    """Parse frequency in Hz: '8MHz' -> 8e6, '32.768kHz' -> 32768"""
    if not s:
        return None
    s = s.replace("Hz", "").replace("hz", "").strip()
    match = _FREQUENCY_PATTERN.search(s)
    if not match:
        return None
    value = _to_float(match.group(1))
    if value is None:
        return None
    suffix = (match.group(2) or "").upper()
    if suffix == "K":
        return value * 1e3
    elif suffix == "M":
        return value * 1e6
    elif suffix == "G":
        return value * 1e9
    return value


def parse_voltage(s: str) -> float | None:
    """Parse voltage: '3.3V' -> 3.3, '500mV' -> 0.5, '5kV' -> 5000"""
    if not s:
        return None
    match = _VOLTAGE_KV_PATTERN.search(s)
    if match:
        value = _to_float(match.group(1))
        return value * 1000 if value is not None else None
    match = _VOLTAGE_MV_PATTERN.search(s)
    if match:
        value = _to_float(match.group(1))
        return value / 1000 if value is not None else None
    match = _VOLTAGE_PATTERN.search(s)
    return _to_float(match.group(1)) if match else None


# Map source_component attribute names to their parser functions
VALUE_PARSERS: dict[str, Callable[[str], float | None]] = {
    "resistance": parse_resistance,
    "max_resistance": parse_resistance,
    "capacitance": parse_capacitance,
    "load_capacitance": parse_capacitance,
    "inductance": parse_inductance,
    "frequency": parse_frequency,
    "voltage": parse_voltage,
}


def parse_value(name: str, value: Any) -> Any:
    """Convert a string value to base units if ``name`` has a parser.

    Numbers, unknown attributes, and unparseable strings are returned as-is.
    """
    parser = VALUE_PARSERS.get(name)
    if parser is None or not isinstance(value, str):
        return value
    parsed = parser(value)
    if parsed is None:
        return value
    # Drop float noise from suffix scaling: 4.7 * 1e-9 -> 4.7e-09
    return float(f"{parsed:.12g}")
