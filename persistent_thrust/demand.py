"""Propellant demand resolution against the shared resource store.

Splits a total demand across the mixture, submits one request per component,
and flags depletion when a positive request comes back empty.

Example:
    >>> from persistent_thrust.demand import DemandResolver
    >>> from persistent_thrust.propellants import PropellantComponent, PropellantMixture
    >>> from persistent_thrust.simulation import TankStore
    >>>
    >>> mixture = PropellantMixture.build([PropellantComponent("XenonGas", 1.0, 0.1)])
    >>> store = TankStore({"XenonGas": 100.0})
    >>> result = DemandResolver(mixture, store).resolve(40.0)
    >>> result.depleted, store.amount("XenonGas")
    (False, 60.0)
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

from beartype import beartype

from persistent_thrust.config import PersistentThrustConfig
from persistent_thrust.errors import ResourceDepletedError
from persistent_thrust.interfaces import CheatOptions, ResourceStore
from persistent_thrust.propellants import PropellantMixture

logger = logging.getLogger(__name__)


class ComponentDemand(NamedTuple):
    """Request and grant for one propellant component."""
    resource_id: str
    requested: float  # [units]
    granted: float    # [units]

    @property
    def depleted(self) -> bool:
        return self.requested > 0.0 and self.granted == 0.0


@beartype
@dataclass(frozen=True)
class DemandResult:
    """Outcome of resolving one total demand.

    Partial grants (0 < granted < requested) are not depletion; the full
    delta-V for the step is still applied.
    """
    components: tuple[ComponentDemand, ...]

    @property
    def depleted(self) -> bool:
        return any(c.depleted for c in self.components)

    @property
    def depleted_resources(self) -> tuple[str, ...]:
        return tuple(c.resource_id for c in self.components if c.depleted)

    @property
    def total_requested(self) -> float:
        return float(sum(c.requested for c in self.components))

    @property
    def total_granted(self) -> float:
        return float(sum(c.granted for c in self.components))

    def raise_if_depleted(self) -> None:
        """Raise ResourceDepletedError if any component was depleted."""
        if self.depleted:
            raise ResourceDepletedError(self.depleted_resources)


@beartype
class DemandResolver:
    """Turns a propellant demand into resource store requests.

    Args:
        mixture: Propellant mixture of the engine
        store: Resource store shared with the rest of the vessel
        config: Request policy; massless and massed flags are read on every
            resolve so toggling them takes effect on the next step
        cheats: Infinite-propellant override, if any
        owner: Name used in log lines
    """

    def __init__(
        self,
        mixture: PropellantMixture,
        store: ResourceStore,
        config: PersistentThrustConfig | None = None,
        cheats: CheatOptions | None = None,
        owner: str = "engine",
    ) -> None:
        self.mixture = mixture
        self.store = store
        self.config = config if config is not None else PersistentThrustConfig()
        self.cheats = cheats
        self.owner = owner

    @property
    def infinite_propellant(self) -> bool:
        return self.cheats is not None and self.cheats.infinite_propellant

    def _is_requested(self, massless: bool) -> bool:
        if massless:
            return self.config.request_massless_propellant
        return self.config.request_massed_propellant

    def resolve(self, propellant_demand: float) -> DemandResult:
        """Request the shares of ``propellant_demand`` from the store.

        Args:
            propellant_demand: Total demand in resource units

        Returns:
            DemandResult with one entry per mixture component
        """
        if propellant_demand > 0.0:
            shares = self.mixture.demand_for(propellant_demand)
        else:
            shares = (0.0,) * len(self.mixture)

        infinite = self.infinite_propellant
        results = []
        for component, share in zip(self.mixture.components, shares):
            if not self._is_requested(component.is_massless):
                results.append(ComponentDemand(component.resource_id, 0.0, 0.0))
                continue

            if infinite:
                granted = share
            elif share > 0.0:
                granted = float(self.store.request_resource(component.resource_id, share))
            else:
                granted = 0.0

            # TODO: scale delta-V by granted / requested once partial grants
            # count as a shortfall
            if share > 0.0 and granted == 0.0:
                logger.info(
                    "[PersistentThrust] %s failed to request %.6g %s",
                    self.owner, share, component.resource_id,
                )
            results.append(ComponentDemand(component.resource_id, share, granted))

        return DemandResult(tuple(results))
