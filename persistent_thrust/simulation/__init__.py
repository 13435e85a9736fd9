"""Reference host for persistent engine simulation.

In-memory collaborators and a fixed-step loop for demonstrations and tests.

Example:
    >>> from persistent_thrust.simulation import Simulator
    >>>
    >>> sim = Simulator.ion_probe(xenon=2000.0)
    >>> sim.engines[0].set_enabled(True)
    >>> sim.clock.set_rate(1000.0)
    >>> result = sim.run(steps=100)
"""

from persistent_thrust.simulation.simulator import (
    CheatToggles,
    FixedEngine,
    OrbitingVehicle,
    SimulationResult,
    Simulator,
    TankStore,
    VesselSample,
    WarpClock,
)

__all__ = [
    "CheatToggles",
    "FixedEngine",
    "OrbitingVehicle",
    "SimulationResult",
    "Simulator",
    "TankStore",
    "VesselSample",
    "WarpClock",
]
