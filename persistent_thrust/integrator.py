"""Rocket-equation thrust integration over an elapsed interval.

During accelerated time a single step can span minutes or hours of mission
time, so the velocity change is integrated with the exponential rocket
equation instead of F/m * dt:

    mdot = F / (Isp * g0)
    dm = mdot * dt
    dv = Isp * g0 * ln(m0 / (m0 - dm))

The burned mass is converted to resource units with the mixture's average
density so it can be requested from the resource store.

Example:
    >>> import numpy as np
    >>> from persistent_thrust.integrator import ThrustIntegrator
    >>> from persistent_thrust.propellants import PropellantComponent, PropellantMixture
    >>>
    >>> mixture = PropellantMixture.build([PropellantComponent("Fuel", 1.0, 1000.0)])
    >>> integrator = ThrustIntegrator(mixture)
    >>> result = integrator.integrate(
    ...     current_mass=10000.0,
    ...     elapsed_time=3600.0,
    ...     thrust=1000.0,
    ...     specific_impulse=300.0,
    ...     thrust_direction=np.array([0.0, 0.0, 1.0]),
    ... )
    >>> round(result.delta_v_magnitude)
    384
"""

import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from persistent_thrust.errors import IntegrationError, MassNonPositiveError
from persistent_thrust.propellants import PropellantMixture

# Standard gravity used by the rocket equation [m/s^2]
# Conventional rounded value, not local gravity
STANDARD_GRAVITY = 9.81


class IntegrationResult(NamedTuple):
    """Velocity change and propellant demand for one interval."""
    delta_v: NDArray[np.float64]  # Velocity change vector [m/s]
    propellant_demand: float      # Demand in resource units
    mass_consumed: float          # Burned propellant mass [kg]

    @property
    def delta_v_magnitude(self) -> float:
        return float(np.linalg.norm(self.delta_v))


# =============================================================================
# Numba-Optimized Core
# =============================================================================


@njit(cache=True)
def _mass_consumed(thrust: float, isp: float, dt: float, g0: float) -> float:
    """Propellant mass burned at constant thrust over dt."""
    return thrust / (isp * g0) * dt


@njit(cache=True)
def _rocket_equation_dv(m0: float, dm: float, isp: float, g0: float) -> float:
    """Ideal velocity change for burning dm out of m0."""
    return isp * g0 * math.log(m0 / (m0 - dm))


@beartype
def unit_vector(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a vector, returning zeros for a degenerate input."""
    norm = np.linalg.norm(v)
    if norm < 1e-12:
        return np.zeros_like(v)
    return v / norm


# =============================================================================
# Integrator
# =============================================================================


@beartype
@dataclass(frozen=True)
class ThrustIntegrator:
    """Integrates thrust for one engine fed by ``mixture``.

    Attributes:
        mixture: Propellant mixture used to convert mass into resource units
    """
    mixture: PropellantMixture

    def integrate(
        self,
        current_mass: float,
        elapsed_time: float,
        thrust: float,
        specific_impulse: float,
        thrust_direction: NDArray[np.float64],
    ) -> IntegrationResult:
        """Compute the velocity change and propellant demand for an interval.

        Args:
            current_mass: Vehicle mass at the start of the interval [kg]
            elapsed_time: Interval length [s]
            thrust: Constant thrust over the interval [N]
            specific_impulse: Specific impulse [s]
            thrust_direction: Thrust direction, normalized internally

        Returns:
            IntegrationResult with the delta-V vector, demand in resource
            units, and burned mass

        Raises:
            MassNonPositiveError: If the vehicle would burn all of its mass
            IntegrationError: If specific impulse is not positive
        """
        direction = np.asarray(thrust_direction, dtype=np.float64)

        if thrust <= 0.0 or elapsed_time <= 0.0:
            return IntegrationResult(np.zeros_like(direction), 0.0, 0.0)

        if specific_impulse <= 0.0:
            raise IntegrationError(
                f"specific impulse must be positive, got {specific_impulse}"
            )

        dm = _mass_consumed(thrust, specific_impulse, elapsed_time, STANDARD_GRAVITY)
        if current_mass <= 0.0 or dm >= current_mass:
            raise MassNonPositiveError(current_mass, dm)

        # A massless mixture burns no resource mass, so nothing to request
        if self.mixture.is_massless:
            demand = 0.0
        else:
            demand = dm / self.mixture.average_density

        dv = _rocket_equation_dv(current_mass, dm, specific_impulse, STANDARD_GRAVITY)

        return IntegrationResult(
            delta_v=dv * unit_vector(direction),
            propellant_demand=float(demand),
            mass_consumed=float(dm),
        )
