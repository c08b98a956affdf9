"""Source component descriptors.

One frozen dataclass per supported ``source_component`` ftype, each holding
only the attributes its catalog lookup uses. Anything else decodes to
``UnknownComponent``.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union

from .parsers import parse_value

SOURCE_COMPONENT_TYPE = "source_component"

Value = Union[float, int, str, None]


@dataclass(frozen=True)
class Resistor:
    ftype: ClassVar[str] = "simple_resistor"
    resistance: Value = None


@dataclass(frozen=True)
class Capacitor:
    ftype: ClassVar[str] = "simple_capacitor"
    capacitance: Value = None


@dataclass(frozen=True)
class PinHeader:
    ftype: ClassVar[str] = "simple_pin_header"
    pin_count: int | None = None
    gender: str | None = None  # "male" | "female"


@dataclass(frozen=True)
class Potentiometer:
    ftype: ClassVar[str] = "simple_potentiometer"
    max_resistance: Value = None


@dataclass(frozen=True)
class Diode:
    ftype: ClassVar[str] = "simple_diode"


@dataclass(frozen=True)
class Chip:
    ftype: ClassVar[str] = "simple_chip"


@dataclass(frozen=True)
class Transistor:
    ftype: ClassVar[str] = "simple_transistor"
    transistor_type: str | None = None  # "npn" | "pnp"
    channel_type: str | None = None


@dataclass(frozen=True)
class PowerSource:
    ftype: ClassVar[str] = "simple_power_source"
    voltage: Value = None


@dataclass(frozen=True)
class Inductor:
    ftype: ClassVar[str] = "simple_inductor"
    inductance: Value = None


@dataclass(frozen=True)
class Crystal:
    ftype: ClassVar[str] = "simple_crystal"
    frequency: Value = None
    load_capacitance: Value = None


@dataclass(frozen=True)
class Mosfet:
    ftype: ClassVar[str] = "simple_mosfet"
    mosfet_mode: str | None = None  # "enhancement" | "depletion"
    channel_type: str | None = None  # "n" | "p"


@dataclass(frozen=True)
class Resonator:
    ftype: ClassVar[str] = "simple_resonator"
    frequency: Value = None


@dataclass(frozen=True)
class Switch:
    ftype: ClassVar[str] = "simple_switch"


@dataclass(frozen=True)
class Led:
    ftype: ClassVar[str] = "simple_led"


@dataclass(frozen=True)
class Fuse:
    ftype: ClassVar[str] = "simple_fuse"


@dataclass(frozen=True)
class UnknownComponent:
    """A source component with no catalog lookup."""
    ftype: str | None = None


SourceComponent = Union[
    Resistor, Capacitor, PinHeader, Potentiometer, Diode, Chip, Transistor,
    PowerSource, Inductor, Crystal, Mosfet, Resonator, Switch, Led, Fuse,
    UnknownComponent,
]

COMPONENT_TYPES: dict[str, type] = {
    cls.ftype: cls
    for cls in (
        Resistor, Capacitor, PinHeader, Potentiometer, Diode, Chip, Transistor,
        PowerSource, Inductor, Crystal, Mosfet, Resonator, Switch, Led, Fuse,
    )
}


def from_source_component(data: dict[str, Any]) -> SourceComponent:
    """Decode a circuit-json ``source_component`` dict into a descriptor.

    Only the attributes of the matched type are read; extra keys are
    ignored. String values with SI suffixes are converted to base units
    ('10k' -> 10000.0, '100nF' -> 1e-7), matching circuit-json's own parsing.

    Example:
        {"type": "source_component", "ftype": "simple_resistor", "resistance": "10k"}
        -> Resistor(resistance=10000.0)
    """
    ftype = data.get("ftype")
    component_type = data.get("type", SOURCE_COMPONENT_TYPE)
    cls = COMPONENT_TYPES.get(ftype) if isinstance(ftype, str) else None
    if component_type != SOURCE_COMPONENT_TYPE or cls is None:
        return UnknownComponent(ftype=ftype if isinstance(ftype, str) else None)

    kwargs = {f.name: parse_value(f.name, data[f.name]) for f in fields(cls) if f.name in data}
    return cls(**kwargs)
