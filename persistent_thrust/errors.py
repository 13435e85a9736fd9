"""Exception hierarchy for persistent thrust simulation.

Every failure the core can hit inside a fixed step has its own type so the
per-engine step handler can decide locally how to degrade. None of these
escape ``PersistentEngine.advance()``.

Example:
    >>> from persistent_thrust.errors import InvalidMixtureError
    >>> from persistent_thrust.propellants import PropellantMixture
    >>> try:
    ...     PropellantMixture.build([])
    ... except InvalidMixtureError as err:
    ...     print(err)
    propellant mixture has no components
"""


class PersistentThrustError(Exception):
    """Base class for all persistent thrust errors."""


class InvalidMixtureError(PersistentThrustError, ValueError):
    """Propellant mixture cannot be built (empty or no positive ratio)."""


class IntegrationError(PersistentThrustError, ValueError):
    """Rocket-equation integration precondition violated."""


class MassNonPositiveError(IntegrationError):
    """Vehicle mass would reach zero or below over the interval.

    Attributes:
        current_mass: Vehicle mass at the start of the interval [kg]
        mass_consumed: Propellant mass the interval would burn [kg]
    """

    def __init__(self, current_mass: float, mass_consumed: float) -> None:
        super().__init__(
            f"mass must stay positive: current {current_mass:.6g} kg, "
            f"consumed {mass_consumed:.6g} kg"
        )
        self.current_mass = current_mass
        self.mass_consumed = mass_consumed


class ResourceDepletedError(PersistentThrustError):
    """A propellant request was granted nothing at all.

    Attributes:
        resource_ids: Components whose request came back empty
    """

    def __init__(self, resource_ids: tuple[str, ...]) -> None:
        super().__init__(f"propellant depleted: {', '.join(resource_ids)}")
        self.resource_ids = resource_ids


class SubOrbitalUnsafeError(PersistentThrustError):
    """Accelerated thrust requested on a sub-orbital trajectory."""
