"""Collaborator interfaces consumed by persistent engines.

The core never looks anything up on its own: the engine hardware, vessel,
resource store, host time regime, and diagnostic sink are handed to it at
construction. Any object with the right attributes satisfies these protocols;
``persistent_thrust.simulation`` ships in-memory implementations.
"""

from enum import Enum, auto
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


class VesselSituation(Enum):
    """Flight situation of a vessel."""

    PRELAUNCH = auto()
    LANDED = auto()
    SPLASHED = auto()
    FLYING = auto()
    SUB_ORBITAL = auto()
    ORBITING = auto()
    ESCAPING = auto()
    DOCKED = auto()


# =============================================================================
# Engine
# =============================================================================


@runtime_checkable
class EngineHardware(Protocol):
    """Read-only query of one engine configuration."""

    @property
    def max_thrust(self) -> float:
        """Maximum thrust [N]."""
        ...

    @property
    def final_thrust(self) -> float:
        """Thrust currently produced [N]."""
        ...

    @property
    def real_specific_impulse(self) -> float:
        """Specific impulse at the current conditions [s]."""
        ...

    @property
    def is_operational(self) -> bool:
        ...

    @property
    def is_enabled(self) -> bool:
        ...

    @property
    def thrust_direction(self) -> NDArray[np.float64]:
        """Thrust direction in the trajectory frame."""
        ...


@runtime_checkable
class OperatingPointSource(Protocol):
    """Resolves which engine configuration is currently active."""

    def current_engine(self) -> EngineHardware:
        ...


# =============================================================================
# Vessel and Host
# =============================================================================


@runtime_checkable
class VesselModel(Protocol):
    """Vessel trajectory, mass, and live controls."""

    main_throttle: float

    def total_mass(self) -> float:
        ...

    def situation(self) -> VesselSituation:
        ...

    def perturb(self, delta_v: NDArray[np.float64], at_time: float) -> None:
        """Apply an impulsive velocity change to the trajectory."""
        ...


@runtime_checkable
class ResourceStore(Protocol):
    """Shared propellant storage."""

    def request_resource(self, resource_id: str, amount: float) -> float:
        """Withdraw up to ``amount`` units and return what was granted."""
        ...


@runtime_checkable
class HostRegime(Protocol):
    """Host simulation loop and its time-advance regime."""

    def is_accelerated(self) -> bool:
        ...

    def exit_acceleration(self) -> None:
        ...

    def fixed_delta_time(self) -> float:
        """Mission time covered by the current fixed step [s]."""
        ...

    def universal_time(self) -> float:
        ...

    def set_acceleration_limit(self, g_limit: float) -> None:
        """Largest acceleration [g] at which the host still allows warp."""
        ...


@runtime_checkable
class DiagnosticSink(Protocol):
    """User-visible messages and durable log lines."""

    def post_message(self, text: str, duration: float) -> None:
        ...

    def log(self, line: str) -> None:
        ...


@runtime_checkable
class CheatOptions(Protocol):
    infinite_propellant: bool
