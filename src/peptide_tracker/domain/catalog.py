"""Static catalog of trackable compounds."""

from dataclasses import dataclass

from peptide_tracker.domain.errors import UnknownCompound


@dataclass(frozen=True)
class CompoundDefinition:
    """Reference data for a single compound."""

    id: str
    name: str
    color: str
    default_cycle_days: int
    doses: tuple[float, ...]
    vial_sizes: tuple[float, ...]
    allows_custom_vial: bool = False


COMPOUNDS: dict[str, CompoundDefinition] = {
    "mounjaro": CompoundDefinition(
        id="mounjaro",
        name="마운자로",
        color="#3b82f6",
        default_cycle_days=7,
        doses=(2.5, 5, 7.5, 10, 12.5, 15),
        vial_sizes=(50, 60, 80),
    ),
    "tesamorelin": CompoundDefinition(
        id="tesamorelin",
        name="테사모렐린",
        color="#10b981",
        default_cycle_days=1,
        doses=(1, 2),
        vial_sizes=(2, 5, 10),
    ),
    "retatrutide": CompoundDefinition(
        id="retatrutide",
        name="레타트루타이드",
        color="#f59e0b",
        default_cycle_days=7,
        doses=(1, 2, 3, 4, 5, 6, 7, 8),
        vial_sizes=(10, 30),
        allows_custom_vial=True,
    ),
}


def get_compound(compound_id: str) -> CompoundDefinition:
    """Return the catalog entry for a compound id."""
    compound = COMPOUNDS.get(compound_id)
    if compound is None:
        raise UnknownCompound(f"Unknown compound: {compound_id}")
    return compound


def list_compounds() -> list[CompoundDefinition]:
    """Return all compounds in catalog order."""
    return list(COMPOUNDS.values())


def resolve_vial_size(
    compound: CompoundDefinition, size: float, custom_size: float | None = None
) -> float:
    """Pick the vial size to register.

    A custom size only applies to compounds that allow custom vials; other
    compounds always use the preset size.
    """
    if compound.allows_custom_vial and custom_size:
        return float(custom_size)
    return float(size)
