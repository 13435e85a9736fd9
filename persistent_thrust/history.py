"""Per-step reports and their tabular export."""

from dataclasses import dataclass
from enum import Enum, auto

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from persistent_thrust.regime import RegimeState


class StepOutcome(Enum):
    """What an engine did on one fixed step."""

    DISABLED = auto()        # Feature off or engine unavailable
    REAL_TIME = auto()       # Host physics applied thrust; sampled if due
    TRANSITION = auto()      # Persisted throttle written back to live control
    APPLIED = auto()         # Delta-V applied to the trajectory
    DEPLETED = auto()        # Propellant depleted, nothing applied
    DEPLETED_EXIT = auto()   # Depleted with throttle up; acceleration stopped
    SUB_ORBITAL = auto()     # Acceleration refused, throttle zeroed
    SKIPPED = auto()         # Integration precondition failed


@beartype
@dataclass(frozen=True)
class StepReport:
    """Record of one advance() call.

    Attributes:
        step: Step index, starting at 1
        time: Universal time at the step [s]
        regime: Regime after the state machine update
        outcome: What the engine did
        delta_v: Velocity change for the step [m/s]
        propellant_demand: Total demand in resource units
        thrust: Thrust used [N]
        specific_impulse: Specific impulse used [s]
        throttle: Throttle used [0-1]
        sampled: Whether the operating point was sampled on this step
    """
    step: int
    time: float
    regime: RegimeState
    outcome: StepOutcome
    delta_v: NDArray[np.float64]
    propellant_demand: float = 0.0
    thrust: float = 0.0
    specific_impulse: float = 0.0
    throttle: float = 0.0
    sampled: bool = False

    @property
    def delta_v_magnitude(self) -> float:
        return float(np.linalg.norm(self.delta_v))

    @property
    def applied(self) -> bool:
        return self.outcome is StepOutcome.APPLIED


@beartype
@dataclass
class StepHistory:
    """Step reports of one engine, in order."""
    reports: list[StepReport]

    def __len__(self) -> int:
        return len(self.reports)

    @property
    def time(self) -> NDArray[np.float64]:
        return np.array([r.time for r in self.reports], dtype=np.float64)

    @property
    def delta_v(self) -> NDArray[np.float64]:
        """Delta-V vectors, shape (N, 3)."""
        return np.array([r.delta_v for r in self.reports], dtype=np.float64).reshape(-1, 3)

    @property
    def total_delta_v(self) -> float:
        """Sum of applied delta-V magnitudes [m/s]."""
        return float(sum(r.delta_v_magnitude for r in self.reports if r.applied))

    @property
    def total_propellant_demand(self) -> float:
        return float(sum(r.propellant_demand for r in self.reports if r.applied))

    def outcomes(self) -> list[StepOutcome]:
        return [r.outcome for r in self.reports]

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        dv = self.delta_v
        return pl.DataFrame({
            "step": [r.step for r in self.reports],
            "time": self.time,
            "regime": [r.regime.name for r in self.reports],
            "outcome": [r.outcome.name for r in self.reports],
            "dv_x": dv[:, 0],
            "dv_y": dv[:, 1],
            "dv_z": dv[:, 2],
            "propellant_demand": [r.propellant_demand for r in self.reports],
            "thrust": [r.thrust for r in self.reports],
            "isp": [r.specific_impulse for r in self.reports],
            "throttle": [r.throttle for r in self.reports],
            "sampled": [r.sampled for r in self.reports],
        })
