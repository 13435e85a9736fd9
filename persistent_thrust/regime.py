"""Time-advance regime state machine.

Decides on every fixed step whether an engine runs in real time, under
accelerated time, or on the one-step edge back to real time.

States:
- DISABLED: feature off, or waiting for the host to return to real time
- REAL_TIME: host physics runs every frame; the engine only samples
- ACCELERATED: the engine integrates thrust over each large step itself
- TRANSITIONING_TO_REAL_TIME: one-step edge after acceleration ends

Transitions:
    DISABLED -> REAL_TIME                    enabled and host in real time
    REAL_TIME -> ACCELERATED                 host accelerated, not sub-orbital
    ACCELERATED -> TRANSITIONING_TO_REAL_TIME host left accelerated time
    TRANSITIONING_TO_REAL_TIME -> REAL_TIME  always, on the next step
    any -> DISABLED                          feature toggled off
    ACCELERATED -> REAL_TIME                 forced, on propellant depletion

Example:
    >>> from persistent_thrust.regime import RegimeController, RegimeState
    >>>
    >>> ctrl = RegimeController()
    >>> ctrl.update(enabled=True, host_accelerated=False, sub_orbital=False).state
    <RegimeState.REAL_TIME: 2>
    >>> ctrl.update(enabled=True, host_accelerated=True, sub_orbital=False).state
    <RegimeState.ACCELERATED: 3>
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple

from beartype import beartype

logger = logging.getLogger(__name__)


class RegimeState(Enum):
    """Time-advance regime of one engine."""

    DISABLED = auto()
    REAL_TIME = auto()
    ACCELERATED = auto()
    TRANSITIONING_TO_REAL_TIME = auto()


class RegimeDecision(NamedTuple):
    """Outcome of one controller update."""
    state: RegimeState
    previous: RegimeState
    entered_transition: bool   # Persisted throttle must be written back this step
    sub_orbital_blocked: bool  # Acceleration refused on a sub-orbital trajectory


@beartype
@dataclass
class RegimeController:
    """Per-engine regime state machine.

    The controller only decides; the engine acts on the returned
    RegimeDecision (throttle write-back, sub-orbital safeguard).
    """
    _state: RegimeState = field(default=RegimeState.DISABLED, init=False)

    @property
    def state(self) -> RegimeState:
        return self._state

    def update(
        self,
        enabled: bool,
        host_accelerated: bool,
        sub_orbital: bool,
    ) -> RegimeDecision:
        """Advance the state machine by one step.

        Args:
            enabled: Feature toggle and engine availability
            host_accelerated: Host is running under accelerated time
            sub_orbital: Vessel is on a sub-orbital trajectory

        Returns:
            RegimeDecision for this step
        """
        previous = self._state
        entered_transition = False
        blocked = False

        if not enabled:
            new = RegimeState.DISABLED
        elif previous is RegimeState.DISABLED:
            new = RegimeState.DISABLED if host_accelerated else RegimeState.REAL_TIME
        elif previous is RegimeState.TRANSITIONING_TO_REAL_TIME:
            new = RegimeState.REAL_TIME
        elif previous is RegimeState.ACCELERATED and not host_accelerated:
            new = RegimeState.TRANSITIONING_TO_REAL_TIME
            entered_transition = True
        elif host_accelerated and sub_orbital:
            # Degraded path: stay in real time while the host warps
            new = RegimeState.REAL_TIME
            blocked = True
        elif host_accelerated:
            new = RegimeState.ACCELERATED
        else:
            new = RegimeState.REAL_TIME

        if new is not previous:
            logger.debug("[PersistentThrust] regime %s -> %s", previous.name, new.name)
        self._state = new

        return RegimeDecision(
            state=new,
            previous=previous,
            entered_transition=entered_transition,
            sub_orbital_blocked=blocked,
        )

    def force_real_time(self) -> None:
        """Leave accelerated time immediately, skipping the transition edge."""
        if self._state is RegimeState.ACCELERATED:
            logger.debug("[PersistentThrust] regime ACCELERATED -> REAL_TIME (forced)")
            self._state = RegimeState.REAL_TIME

    def disable(self) -> None:
        self._state = RegimeState.DISABLED
