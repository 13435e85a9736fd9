"""Throttled sampling of the live engine operating point.

Reading the engine and vehicle every physics tick is wasteful, and during
accelerated time the live values are not trustworthy anyway. The engine keeps
the last sampled specific impulse, throttle, and thrust, and refreshes them on
a fixed cadence of steps.

Example:
    >>> from persistent_thrust.sampling import SampledEngineState, SamplingPolicy
    >>>
    >>> policy = SamplingPolicy(period=4)
    >>> [policy.tick() for _ in range(8)]
    [False, False, False, True, False, False, False, True]
    >>>
    >>> state = SampledEngineState()
    >>> state.sample(isp=4200.0, throttle=1.0, thrust=2000.0)
    >>> state.current_values()
    EngineSample(specific_impulse=4200.0, throttle=1.0, thrust=2000.0)
"""

from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from beartype import beartype

from persistent_thrust.config import DEFAULT_SAMPLE_PERIOD

# Readings may come straight from host arrays
Reading = float | int | np.floating | np.integer


class EngineSample(NamedTuple):
    """One sampled engine operating point."""
    specific_impulse: float  # [s]
    throttle: float          # [0-1]
    thrust: float            # [N]


# =============================================================================
# Sampled State
# =============================================================================


@beartype
@dataclass
class SampledEngineState:
    """Most recent known engine operating point.

    The triple is stored as a single immutable EngineSample and replaced as a
    whole, so a reader never sees a partially updated sample.
    """
    _sample: EngineSample = field(
        default_factory=lambda: EngineSample(0.0, 0.0, 0.0), init=False, repr=False,
    )

    def sample(self, isp: Reading, throttle: Reading, thrust: Reading) -> None:
        """Overwrite the stored operating point.

        Args:
            isp: Live specific impulse [s]
            throttle: Live throttle setting [0-1]
            thrust: Live thrust [N]
        """
        # Negative readings are clamped rather than rejected
        self._sample = EngineSample(
            specific_impulse=max(0.0, float(isp)),
            throttle=max(0.0, float(throttle)),
            thrust=max(0.0, float(thrust)),
        )

    def current_values(self) -> EngineSample:
        return self._sample

    @property
    def specific_impulse(self) -> float:
        return self._sample.specific_impulse

    @property
    def throttle(self) -> float:
        return self._sample.throttle

    @property
    def thrust(self) -> float:
        return self._sample.thrust


# =============================================================================
# Sampling Policy
# =============================================================================


@beartype
@dataclass
class SamplingPolicy:
    """Sample once every ``period`` steps.

    The counter is advanced by ``tick()`` and reset to zero whenever a sample
    is due, so the cadence does not depend on the size of each step.

    Attributes:
        period: Steps per sample (the default samples on every 16th tick)
    """
    period: int = DEFAULT_SAMPLE_PERIOD
    _counter: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.period < 1:
            raise ValueError(f"Sampling period must be >= 1, got {self.period}")

    def tick(self) -> bool:
        """Advance one step.

        Returns:
            True if a sample is due on this step
        """
        self._counter += 1
        if self._counter < self.period:
            return False
        self._counter = 0
        return True

    def reset(self) -> None:
        """Restart the cadence from zero."""
        self._counter = 0

    @property
    def counter(self) -> int:
        """Ticks since the last sample."""
        return self._counter
