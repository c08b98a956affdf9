"""Parts engine: resolve source components to JLCPCB part numbers.

Each supported component type maps to a catalog category and a function
building that category's search parameters. Resolution is one table lookup,
one (cached) catalog query, and a basic-first ranking of the results.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from .client import JLCSearchClient, get_candidates
from .components import (
    Capacitor,
    Crystal,
    Inductor,
    Mosfet,
    PinHeader,
    Potentiometer,
    PowerSource,
    Resistor,
    Resonator,
    SourceComponent,
    Transistor,
    UnknownComponent,
    from_source_component,
)
from .config import MAX_RESULTS, SUPPLIER_KEY
from .footprints import normalize_footprint, parse_pitch
from .ranking import rank_candidates

logger = logging.getLogger(__name__)


class Catalog(Protocol):
    async def query(self, category: str, params: dict[str, Any]) -> dict[str, Any]: ...


# Each builder takes the descriptor class registered under its own ftype
# (COMPONENT_TYPES), so the argument is narrowed per builder rather than here.
ParamBuilder = Callable[[Any, str | None, str | None], dict[str, Any]]


@dataclass(frozen=True)
class CategoryQuery:
    """Catalog category and parameter builder for one component type.

    ``build_params`` receives (component, normalized package, raw footprint).
    """
    category: str
    build_params: ParamBuilder


def _package_only(component: Any, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"package": package}


def _resistor_params(component: Resistor, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"resistance": component.resistance, "package": package}


def _capacitor_params(component: Capacitor, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"capacitance": component.capacitance, "package": package}


def _pin_header_params(component: PinHeader, package: str | None, footprint: str | None) -> dict[str, Any]:
    # Headers are matched on pin count and pitch, not package
    params: dict[str, Any] = {"num_pins": component.pin_count, "gender": component.gender}
    pitch = parse_pitch(footprint)
    if pitch:
        params["pitch"] = pitch
    return params


def _potentiometer_params(component: Potentiometer, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"resistance": component.max_resistance, "package": package}


def _transistor_params(component: Transistor, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {
        "package": package,
        "transistor_type": component.transistor_type,
        "channel_type": component.channel_type,
    }


def _power_source_params(component: PowerSource, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"voltage": component.voltage, "package": package}


def _inductor_params(component: Inductor, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"inductance": component.inductance, "package": package}


def _crystal_params(component: Crystal, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {
        "frequency": component.frequency,
        "load_capacitance": component.load_capacitance,
        "package": package,
    }


def _mosfet_params(component: Mosfet, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {
        "package": package,
        "mosfet_mode": component.mosfet_mode,
        "channel_type": component.channel_type,
    }


def _resonator_params(component: Resonator, package: str | None, footprint: str | None) -> dict[str, Any]:
    return {"frequency": component.frequency, "package": package}


# ftype -> catalog lookup
CATEGORY_QUERIES: dict[str, CategoryQuery] = {
    "simple_resistor": CategoryQuery("resistors", _resistor_params),
    "simple_capacitor": CategoryQuery("capacitors", _capacitor_params),
    "simple_pin_header": CategoryQuery("headers", _pin_header_params),
    "simple_potentiometer": CategoryQuery("potentiometers", _potentiometer_params),
    "simple_diode": CategoryQuery("diodes", _package_only),
    "simple_chip": CategoryQuery("chips", _package_only),
    "simple_transistor": CategoryQuery("transistors", _transistor_params),
    "simple_power_source": CategoryQuery("power_sources", _power_source_params),
    "simple_inductor": CategoryQuery("inductors", _inductor_params),
    "simple_crystal": CategoryQuery("crystals", _crystal_params),
    "simple_mosfet": CategoryQuery("mosfets", _mosfet_params),
    "simple_resonator": CategoryQuery("resonators", _resonator_params),
    "simple_switch": CategoryQuery("switches", _package_only),
    "simple_led": CategoryQuery("leds", _package_only),
    "simple_fuse": CategoryQuery("fuses", _package_only),
}


def build_query(component: SourceComponent, footprint: str | None) -> tuple[str, dict[str, Any]] | None:
    """Get (category, params) for a component, or None if it has no catalog lookup."""
    if isinstance(component, UnknownComponent):
        return None
    lookup = CATEGORY_QUERIES.get(component.ftype)
    if lookup is None:
        return None
    package = normalize_footprint(footprint)
    return lookup.category, lookup.build_params(component, package, footprint)


class JLCPartsEngine:
    """Finds JLCPCB part numbers for source components.

    The engine owns its catalog, and with it the result cache; create one
    engine per batch (or per server) to share cached lookups.
    """

    def __init__(self, catalog: Catalog | None = None, max_results: int = MAX_RESULTS):
        self._owns_catalog = catalog is None
        self._catalog: Catalog = catalog if catalog is not None else JLCSearchClient()
        self._max_results = max_results

    async def find_part(
        self,
        source_component: SourceComponent | dict[str, Any],
        footprinter_string: str | None = None,
    ) -> dict[str, list[str]]:
        """Find supplier part numbers for a source component.

        Args:
            source_component: Descriptor or circuit-json source_component dict
            footprinter_string: KiCad or footprinter footprint, if any

        Returns:
            {"jlcpcb": ["C25804", ...]} with at most ``max_results`` entries,
            or {} if the component type has no catalog lookup.

        Raises:
            CatalogError: The catalog lookup failed
        """
        if isinstance(source_component, dict):
            component = from_source_component(source_component)
        else:
            component = source_component

        query = build_query(component, footprinter_string)
        if query is None:
            logger.debug(f"No catalog lookup for component type {component.ftype!r}")
            return {}

        category, params = query
        response = await self._catalog.query(category, params)
        candidates = get_candidates(response, category)
        return {SUPPLIER_KEY: rank_candidates(candidates, self._max_results)}

    async def close(self) -> None:
        """Close the catalog client if this engine created it."""
        if self._owns_catalog and isinstance(self._catalog, JLCSearchClient):
            await self._catalog.close()
