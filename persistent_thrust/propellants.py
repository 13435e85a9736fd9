"""Propellant mixtures feeding a single engine.

A mixture is the ordered set of resources an engine draws from together with
their flow ratios. It is built once when the engine is wired up and never
changes afterwards, so the average density is computed a single time.

Features:
- Resource density table (kg per resource unit)
- Average mixture density used to convert burned mass into resource units
- Proportional, stateless split of a total demand across components

Example:
    >>> from persistent_thrust.propellants import PropellantComponent, PropellantMixture
    >>>
    >>> mixture = PropellantMixture.build([
    ...     PropellantComponent.from_resource("LiquidFuel", 1.0),
    ...     PropellantComponent.from_resource("Oxidizer", 3.0),
    ... ])
    >>> mixture.average_density
    5.0
    >>> mixture.demand_for(8.0)
    (2.0, 6.0)
"""

from collections.abc import Sequence
from dataclasses import dataclass

from beartype import beartype

from persistent_thrust.errors import InvalidMixtureError

# =============================================================================
# Resource Database
# =============================================================================

# Resource densities [kg per resource unit]
# Zero density marks a massless resource (electric charge and the like)
RESOURCE_DENSITIES: dict[str, float] = {
    # Bipropellant
    "LiquidFuel": 5.0,
    "Oxidizer": 5.0,
    # Monopropellant
    "MonoPropellant": 4.0,
    "SolidFuel": 7.5,
    # Electric propulsion
    "XenonGas": 0.1,
    "ArgonGas": 0.05,
    "ElectricCharge": 0.0,
    # Air breathing
    "IntakeAir": 5.0,
    "Ore": 10.0,
}

# Average density reported by a mixture whose components are all massless
MASSLESS = 0.0


@beartype
def get_resource_density(resource: str) -> float:
    """Get density of a resource in kg per unit.

    Args:
        resource: Resource name (e.g., "LiquidFuel", "XenonGas")

    Returns:
        Density in kg per resource unit

    Raises:
        ValueError: If resource not found in database
    """
    if resource in RESOURCE_DENSITIES:
        return RESOURCE_DENSITIES[resource]

    # Case-insensitive fallback
    name = resource.lower().replace(" ", "")
    for key, value in RESOURCE_DENSITIES.items():
        if key.lower() == name:
            return value

    available = list(RESOURCE_DENSITIES.keys())
    raise ValueError(f"Unknown resource '{resource}'. Available: {available}")


@beartype
def list_resources() -> list[str]:
    """List resources in the density database."""
    return list(RESOURCE_DENSITIES.keys())


# =============================================================================
# Data Structures
# =============================================================================


@beartype
@dataclass(frozen=True, slots=True)
class PropellantComponent:
    """One resource consumed by an engine.

    Attributes:
        resource_id: Resource name used with the resource store
        ratio: Flow ratio relative to the other components [-]
        density: Mass per resource unit [kg/unit], zero if massless
    """

    resource_id: str
    ratio: float | int
    density: float | int

    @property
    def is_massless(self) -> bool:
        """True if drawing this resource removes no mass."""
        return self.density == 0

    @classmethod
    def from_resource(cls, resource_id: str, ratio: float | int) -> "PropellantComponent":
        """Create a component with density looked up from the database."""
        return cls(resource_id=resource_id, ratio=ratio, density=get_resource_density(resource_id))


@beartype
@dataclass(frozen=True, slots=True)
class PropellantMixture:
    """Immutable propellant set for one engine.

    Use ``PropellantMixture.build`` rather than the constructor so the
    components are validated and the average density is computed once.

    Attributes:
        components: Ordered propellant components
        total_ratio: Sum of component ratios [-]
        average_density: Ratio weighted density [kg/unit], MASSLESS if
            every component is massless
    """

    components: tuple[PropellantComponent, ...]
    total_ratio: float
    average_density: float

    @classmethod
    def build(cls, components: Sequence[PropellantComponent]) -> "PropellantMixture":
        """Validate components and compute mixture properties.

        The average density is sum(ratio * density) / sum(ratio). With flow
        ratios this is the mass-fraction weighted harmonic mean of the
        component densities, and massless components dilute it so that
        ``demand * density`` summed over components returns the burned mass.

        Args:
            components: Propellant components in engine order

        Returns:
            Built mixture

        Raises:
            InvalidMixtureError: If there are no components, a negative ratio
                or density, or no positive ratio
        """
        components = tuple(components)
        if not components:
            raise InvalidMixtureError("propellant mixture has no components")

        for component in components:
            if component.ratio < 0:
                raise InvalidMixtureError(
                    f"negative ratio {component.ratio} for {component.resource_id}"
                )
            if component.density < 0:
                raise InvalidMixtureError(
                    f"negative density {component.density} for {component.resource_id}"
                )

        total_ratio = float(sum(c.ratio for c in components))
        if total_ratio <= 0:
            raise InvalidMixtureError("propellant ratios must sum to a positive value")

        weighted = float(sum(c.ratio * c.density for c in components))
        average_density = weighted / total_ratio if weighted > 0 else MASSLESS

        return cls(
            components=components,
            total_ratio=total_ratio,
            average_density=average_density,
        )

    @property
    def is_massless(self) -> bool:
        """True if no component carries mass."""
        return self.average_density == MASSLESS

    @property
    def resource_ids(self) -> tuple[str, ...]:
        return tuple(c.resource_id for c in self.components)

    def demand_for(self, total_demand: float | int) -> tuple[float, ...]:
        """Split a total demand across components by flow ratio.

        Args:
            total_demand: Total demand in resource units

        Returns:
            Per-component demand, in component order
        """
        return tuple(
            total_demand * c.ratio / self.total_ratio for c in self.components
        )

    def __len__(self) -> int:
        return len(self.components)
