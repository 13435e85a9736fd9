"""Step-driven reference host for persistent engines.

Provides in-memory implementations of every collaborator a PersistentEngine
needs, plus a simulator that owns the fixed-step loop the way a game engine
would.

Architecture:
    The simulator owns the loop and on every step:
    - calls engine.advance() on each persistent engine
    - advances the warp clock by one fixed step
    - records the vessel state

Example:
    >>> from persistent_thrust.simulation import Simulator
    >>>
    >>> sim = Simulator.ion_probe(xenon=2000.0)
    >>> sim.engines[0].set_enabled(True)
    >>> sim.run(steps=50)              # real time
    >>> sim.clock.set_rate(1000.0)
    >>> result = sim.run(steps=200)    # accelerated
    >>> print(f"dv = {result.delta_v_gained:.1f} m/s")
"""

import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from persistent_thrust.config import PersistentThrustConfig
from persistent_thrust.diagnostics import LoggingDiagnostics
from persistent_thrust.engine import PersistentEngine
from persistent_thrust.interfaces import EngineHardware, VesselSituation
from persistent_thrust.propellants import RESOURCE_DENSITIES, PropellantComponent

# =============================================================================
# Collaborators
# =============================================================================


@beartype
@dataclass
class FixedEngine:
    """Engine hardware with constant, directly settable readings.

    Also acts as its own operating point source.
    """
    max_thrust: float = 0.0
    final_thrust: float = 0.0
    real_specific_impulse: float = 0.0
    is_operational: bool = True
    is_enabled: bool = True
    thrust_direction: NDArray[np.float64] = field(
        default_factory=lambda: np.array([1.0, 0.0, 0.0])
    )

    def current_engine(self) -> EngineHardware:
        return self


@beartype
class TankStore:
    """Resource store holding named amounts.

    Requests are granted up to the amount remaining. Densities default to
    the resource database, and to zero for unknown resources.

    Args:
        amounts: Initial amount per resource [units]
        densities: Density overrides [kg/unit]
    """

    def __init__(
        self,
        amounts: dict[str, float | int],
        densities: dict[str, float | int] | None = None,
    ) -> None:
        self._amounts = {name: float(amount) for name, amount in amounts.items()}
        self._densities = {
            name: RESOURCE_DENSITIES.get(name, 0.0) for name in self._amounts
        }
        if densities is not None:
            self._densities.update({name: float(d) for name, d in densities.items()})
        self.requests: list[tuple[str, float, float]] = []

    def request_resource(self, resource_id: str, amount: float) -> float:
        """Withdraw up to ``amount`` units and return what was granted."""
        available = self._amounts.get(resource_id, 0.0)
        granted = min(max(amount, 0.0), available)
        self._amounts[resource_id] = available - granted
        self.requests.append((resource_id, amount, granted))
        return granted

    def amount(self, resource_id: str) -> float:
        return self._amounts.get(resource_id, 0.0)

    def set_amount(self, resource_id: str, amount: float | int) -> None:
        self._amounts[resource_id] = float(amount)

    def total_mass(self) -> float:
        """Mass of everything stored [kg]."""
        return float(sum(
            amount * self._densities.get(name, 0.0)
            for name, amount in self._amounts.items()
        ))


@beartype
@dataclass
class OrbitingVehicle:
    """Vessel with a velocity vector and impulsive perturbations.

    Attributes:
        dry_mass: Mass without stored resources [kg]
        main_throttle: Live throttle control [0-1]
        store: Tanks whose contents count toward the total mass
        velocity: Inertial velocity [m/s]
        flight_situation: Situation reported to engines
    """
    dry_mass: float
    main_throttle: float = 0.0
    store: TankStore | None = None
    velocity: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    flight_situation: VesselSituation = VesselSituation.ORBITING
    perturbations: list[tuple[float, NDArray[np.float64]]] = field(
        default_factory=list, init=False, repr=False,
    )

    def total_mass(self) -> float:
        if self.store is None:
            return self.dry_mass
        return self.dry_mass + self.store.total_mass()

    def situation(self) -> VesselSituation:
        return self.flight_situation

    def perturb(self, delta_v: NDArray[np.float64], at_time: float) -> None:
        self.velocity = self.velocity + delta_v
        self.perturbations.append((at_time, delta_v.copy()))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@beartype
@dataclass
class WarpClock:
    """Host time regime with a warp rate.

    Rates above 1 run the accelerated regime; each fixed step then covers
    ``base_dt * rate`` seconds of mission time.

    Attributes:
        base_dt: Real-time fixed step [s]
        rate: Current warp rate [-]
        time: Universal time [s]
        acceleration_limit: Highest acceleration allowing warp [g]
    """
    base_dt: float = 0.02
    rate: float = 1.0
    time: float = 0.0
    acceleration_limit: float = math.inf
    exits: int = field(default=0, init=False)

    def is_accelerated(self) -> bool:
        return self.rate > 1.0

    def exit_acceleration(self) -> None:
        self.rate = 1.0
        self.exits += 1

    def set_rate(self, rate: float) -> None:
        if rate < 1.0:
            raise ValueError(f"Warp rate must be >= 1, got {rate}")
        self.rate = rate

    def fixed_delta_time(self) -> float:
        return self.base_dt * self.rate

    def universal_time(self) -> float:
        return self.time

    def set_acceleration_limit(self, g_limit: float) -> None:
        self.acceleration_limit = g_limit

    def tick(self) -> None:
        self.time += self.fixed_delta_time()


@beartype
@dataclass
class CheatToggles:
    infinite_propellant: bool = False


# =============================================================================
# Simulator
# =============================================================================


class VesselSample(NamedTuple):
    """Vessel state recorded after one step."""
    time: float                      # [s]
    rate: float                      # Warp rate [-]
    mass: float                      # [kg]
    velocity: NDArray[np.float64]    # [m/s]
    throttle: float                  # [0-1]


@beartype
@dataclass
class Simulator:
    """Fixed-step host loop driving persistent engines.

    Example:
        >>> sim = Simulator(vessel=vessel, clock=WarpClock(), engines=[engine])
        >>> result = sim.run(steps=1000)
    """
    vessel: OrbitingVehicle
    clock: WarpClock
    engines: list[PersistentEngine] = field(default_factory=list)

    _history: list[VesselSample] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self._history = [self._sample()]

    @classmethod
    def ion_probe(
        cls,
        xenon: float = 2000.0,
        electric_charge: float = 1.0e6,
        dry_mass: float = 800.0,
        thrust: float = 2000.0,
        isp: float = 4200.0,
        throttle: float = 1.0,
        config: PersistentThrustConfig | None = None,
    ) -> "Simulator":
        """Create an orbiting probe with one xenon ion engine.

        Args:
            xenon: Xenon load [units]
            electric_charge: Stored charge [units]
            dry_mass: Probe dry mass [kg]
            thrust: Engine thrust [N]
            isp: Engine specific impulse [s]
            throttle: Initial main throttle [0-1]
            config: Persistent thrust options for the engine
        """
        store = TankStore({"XenonGas": xenon, "ElectricCharge": electric_charge})
        vessel = OrbitingVehicle(dry_mass=dry_mass, main_throttle=throttle, store=store)
        clock = WarpClock()
        hardware = FixedEngine(
            max_thrust=thrust,
            final_thrust=thrust * throttle,
            real_specific_impulse=isp,
        )
        engine = PersistentEngine(
            source=hardware,
            vessel=vessel,
            store=store,
            host=clock,
            components=[
                PropellantComponent.from_resource("XenonGas", 0.1),
                PropellantComponent.from_resource("ElectricCharge", 1.8),
            ],
            config=config,
            diagnostics=LoggingDiagnostics(),
            name="ion engine",
        )
        return cls(vessel=vessel, clock=clock, engines=[engine])

    def _sample(self) -> VesselSample:
        return VesselSample(
            time=self.clock.time,
            rate=self.clock.rate,
            mass=self.vessel.total_mass(),
            velocity=self.vessel.velocity.copy(),
            throttle=self.vessel.main_throttle,
        )

    def step(self) -> None:
        """Advance every engine, then the clock, by one fixed step."""
        for engine in self.engines:
            engine.advance()
        self.clock.tick()
        self._history.append(self._sample())

    def run(self, steps: int) -> "SimulationResult":
        """Run ``steps`` fixed steps and return the full recorded history."""
        for _ in range(steps):
            self.step()
        return SimulationResult(samples=list(self._history))

    def clear_history(self) -> None:
        self._history = [self._sample()]


# =============================================================================
# Results
# =============================================================================


@beartype
@dataclass
class SimulationResult:
    """Vessel history from a simulator run."""
    samples: list[VesselSample]

    @property
    def time(self) -> NDArray[np.float64]:
        return np.array([s.time for s in self.samples])

    @property
    def mass(self) -> NDArray[np.float64]:
        return np.array([s.mass for s in self.samples])

    @property
    def velocity(self) -> NDArray[np.float64]:
        """Velocity history [m/s], shape (N, 3)."""
        return np.array([s.velocity for s in self.samples])

    @property
    def speed(self) -> NDArray[np.float64]:
        return np.linalg.norm(self.velocity, axis=1)

    @property
    def rate(self) -> NDArray[np.float64]:
        return np.array([s.rate for s in self.samples])

    @property
    def delta_v_gained(self) -> float:
        """Speed change between the first and last sample [m/s]."""
        return float(np.linalg.norm(self.samples[-1].velocity - self.samples[0].velocity))

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        velocity = self.velocity
        return pl.DataFrame({
            "time": self.time,
            "warp_rate": self.rate,
            "mass": self.mass,
            "speed": self.speed,
            "vx": velocity[:, 0],
            "vy": velocity[:, 1],
            "vz": velocity[:, 2],
            "throttle": [s.throttle for s in self.samples],
        })
