"""Persistent engine: continuous thrust across real and accelerated time.

Ties the regime state machine, operating point sampling, thrust integration
and propellant demand resolution together behind a single per-step entry
point. The host calls ``advance()`` once per fixed physics step.

Architecture:
    Host loop owns the step and calls:
    - engine.advance() -> StepReport
    - engine.telemetry() -> thrust / Isp / throttle for display

    Within one step the order is fixed:
        sample (if due) -> integrate -> resolve demand -> perturb

Example:
    >>> from persistent_thrust import PersistentEngine, PersistentThrustConfig
    >>> from persistent_thrust.propellants import PropellantComponent
    >>> from persistent_thrust.simulation import (
    ...     FixedEngine, OrbitingVehicle, TankStore, WarpClock,
    ... )
    >>>
    >>> engine = PersistentEngine(
    ...     source=FixedEngine(max_thrust=2000.0, final_thrust=2000.0,
    ...                        real_specific_impulse=4200.0),
    ...     vessel=OrbitingVehicle(dry_mass=1000.0, main_throttle=1.0),
    ...     store=TankStore({"XenonGas": 5000.0}),
    ...     host=WarpClock(),
    ...     components=[PropellantComponent.from_resource("XenonGas", 1.0)],
    ...     config=PersistentThrustConfig(persistent_enabled=True),
    ... )
    >>> report = engine.advance()
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import NamedTuple

import numpy as np
from beartype import beartype

from persistent_thrust.config import PersistentThrustConfig
from persistent_thrust.demand import DemandResolver
from persistent_thrust.diagnostics import LoggingDiagnostics
from persistent_thrust.errors import (
    IntegrationError,
    InvalidMixtureError,
    ResourceDepletedError,
    SubOrbitalUnsafeError,
)
from persistent_thrust.history import StepHistory, StepOutcome, StepReport
from persistent_thrust.integrator import STANDARD_GRAVITY, IntegrationResult, ThrustIntegrator
from persistent_thrust.interfaces import (
    CheatOptions,
    DiagnosticSink,
    EngineHardware,
    HostRegime,
    OperatingPointSource,
    ResourceStore,
    VesselModel,
    VesselSituation,
)
from persistent_thrust.propellants import PropellantComponent, PropellantMixture
from persistent_thrust.regime import RegimeController, RegimeState
from persistent_thrust.sampling import SampledEngineState, SamplingPolicy

logger = logging.getLogger(__name__)

DEPLETED_MESSAGE = "Thrust warp stopped - propellant depleted"
SUB_ORBITAL_MESSAGE = "Cannot accelerate and timewarp during sub orbital spaceflight!"


class Telemetry(NamedTuple):
    """Display values for one engine."""
    thrust: float             # [N]
    specific_impulse: float   # [s]
    throttle_fraction: float  # [0-1]


# =============================================================================
# Persistent Engine
# =============================================================================


@beartype
class PersistentEngine:
    """Simulates one engine under both time-advance regimes.

    All collaborators are injected. If the propellant mixture is invalid the
    engine is built anyway but stays disabled for its whole lifetime.

    Args:
        source: Active engine configuration (single or multi-mode)
        vessel: Vessel owning the engine
        store: Resource store the propellant is drawn from
        host: Host time-advance regime
        components: Propellant components feeding the engine
        config: Persistent thrust options, copied so each engine owns its own
        diagnostics: Sink for on-screen messages and log lines
        cheats: Infinite-propellant override, if any
        name: Engine name used in diagnostics
    """

    def __init__(
        self,
        source: OperatingPointSource,
        vessel: VesselModel,
        store: ResourceStore,
        host: HostRegime,
        components: Sequence[PropellantComponent],
        config: PersistentThrustConfig | None = None,
        diagnostics: DiagnosticSink | None = None,
        cheats: CheatOptions | None = None,
        name: str = "engine",
    ) -> None:
        self.source = source
        self.vessel = vessel
        self.store = store
        self.host = host
        self.config = replace(config) if config is not None else PersistentThrustConfig()
        self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
        self.name = name

        self.regime = RegimeController()
        self.sampled = SampledEngineState()
        self.sampling = SamplingPolicy(period=self.config.sample_period)

        self.mixture: PropellantMixture | None = None
        self.integrator: ThrustIntegrator | None = None
        self.resolver: DemandResolver | None = None
        try:
            self.mixture = PropellantMixture.build(components)
        except InvalidMixtureError as err:
            logger.warning("[PersistentThrust] %s disabled: %s", name, err)
        else:
            self.integrator = ThrustIntegrator(self.mixture)
            self.resolver = DemandResolver(
                self.mixture, store, config=self.config, cheats=cheats, owner=name,
            )

        self._step = 0
        self._history: list[StepReport] = []

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def available(self) -> bool:
        """False if the propellant mixture could not be built."""
        return self.mixture is not None

    @property
    def enabled(self) -> bool:
        return self.available and self.config.persistent_enabled

    @property
    def state(self) -> RegimeState:
        return self.regime.state

    def set_enabled(self, enabled: bool) -> None:
        """Toggle the feature; takes effect on the next step."""
        self.config.persistent_enabled = enabled

    def telemetry(self) -> Telemetry:
        """Thrust, Isp and throttle for display.

        Live values in real time, the persisted sample otherwise.
        """
        if self.state is RegimeState.REAL_TIME:
            engine = self.source.current_engine()
            return Telemetry(
                thrust=self._live_thrust(engine),
                specific_impulse=max(0.0, float(engine.real_specific_impulse)),
                throttle_fraction=max(0.0, float(self.vessel.main_throttle)),
            )
        sample = self.sampled.current_values()
        return Telemetry(sample.thrust, sample.specific_impulse, sample.throttle)

    def history(self) -> StepHistory:
        return StepHistory(list(self._history))

    def clear_history(self) -> None:
        self._history = []

    # -------------------------------------------------------------------------
    # Step
    # -------------------------------------------------------------------------

    def advance(self) -> StepReport:
        """Run one fixed step.

        Never raises for per-step failures: depletion, sub-orbital
        trajectories and integration preconditions are handled here and
        reported through the returned StepReport and the diagnostic sink.

        Returns:
            StepReport describing what the engine did
        """
        self._step += 1
        now = float(self.host.universal_time())
        host_accelerated = self.host.is_accelerated()
        sub_orbital = self.vessel.situation() is VesselSituation.SUB_ORBITAL

        decision = self.regime.update(self.enabled, host_accelerated, sub_orbital)
        engine = self.source.current_engine()

        if decision.state is RegimeState.DISABLED:
            report = self._report(now, StepOutcome.DISABLED)
        elif decision.entered_transition:
            # Only write of a persisted value into live control
            self.vessel.main_throttle = self.sampled.throttle
            report = self._report(
                now, StepOutcome.TRANSITION, throttle=self.sampled.throttle,
            )
        else:
            try:
                if decision.sub_orbital_blocked or decision.state is RegimeState.ACCELERATED:
                    report = self._accelerated_step(engine, now, sub_orbital)
                else:
                    report = self._real_time_step(engine, now)
            except SubOrbitalUnsafeError as err:
                report = self._handle_sub_orbital(err, now)
            except ResourceDepletedError as err:
                report = self._handle_depletion(err, now)
            except IntegrationError as err:
                report = self._handle_integration_error(err, now)

        if self.config.record_history:
            self._history.append(report)
        return report

    @staticmethod
    def _live_thrust(engine: EngineHardware) -> float:
        """Live thrust, zero unless the engine is both enabled and operational."""
        if not (engine.is_enabled and engine.is_operational):
            return 0.0
        return max(0.0, float(engine.final_thrust))

    def _sample_if_due(self, engine: EngineHardware) -> bool:
        """Refresh the persisted operating point on the sampling cadence."""
        if not self.sampling.tick():
            return False

        self.sampled.sample(
            isp=engine.real_specific_impulse,
            throttle=self.vessel.main_throttle,
            thrust=self._live_thrust(engine),
        )

        # Let the host keep accelerated time while this engine is thrusting
        mass = self.vessel.total_mass()
        if mass > 0.0:
            self.host.set_acceleration_limit(
                engine.max_thrust / mass / STANDARD_GRAVITY + 1.0
            )
        return True

    def _real_time_step(self, engine: EngineHardware, now: float) -> StepReport:
        """Host physics applies thrust; only sample and report the live step."""
        sampled = self._sample_if_due(engine)

        thrust = self._live_thrust(engine)
        isp = max(0.0, float(engine.real_specific_impulse))
        try:
            result = self._integrate(thrust, isp, engine)
        except IntegrationError as err:
            # Flameout readings are routine in real time; keep them out of the sink
            logger.debug("[PersistentThrust] %s live step not integrated: %s", self.name, err)
            result = None

        return self._report(
            now,
            StepOutcome.REAL_TIME,
            result=result,
            thrust=thrust,
            isp=isp,
            throttle=float(self.vessel.main_throttle),
            sampled=sampled,
        )

    def _accelerated_step(
        self,
        engine: EngineHardware,
        now: float,
        sub_orbital: bool,
    ) -> StepReport:
        """Integrate persisted thrust over one large step and perturb the orbit."""
        if sub_orbital:
            raise SubOrbitalUnsafeError(SUB_ORBITAL_MESSAGE)

        sampled = self._sample_if_due(engine)
        sample = self.sampled.current_values()

        # A sample taken before shutdown must not keep a dead engine thrusting
        thrust = sample.thrust
        if not (engine.is_enabled and engine.is_operational):
            thrust = 0.0

        result = self._integrate(thrust, sample.specific_impulse, engine)
        demand = self.resolver.resolve(result.propellant_demand)
        demand.raise_if_depleted()

        if result.delta_v_magnitude > 0.0:
            self.vessel.perturb(result.delta_v, now)

        return self._report(
            now,
            StepOutcome.APPLIED,
            result=result,
            thrust=thrust,
            isp=sample.specific_impulse,
            throttle=sample.throttle,
            sampled=sampled,
        )

    def _integrate(self, thrust: float, isp: float, engine: EngineHardware) -> IntegrationResult:
        return self.integrator.integrate(
            current_mass=float(self.vessel.total_mass()),
            elapsed_time=float(self.host.fixed_delta_time()),
            thrust=thrust,
            specific_impulse=isp,
            thrust_direction=np.asarray(engine.thrust_direction, dtype=np.float64),
        )

    # -------------------------------------------------------------------------
    # Failure handling
    # -------------------------------------------------------------------------

    def _notify(self, text: str) -> None:
        self.diagnostics.log(f"[PersistentThrust] {text}")
        self.diagnostics.post_message(text, self.config.message_duration)

    def _handle_sub_orbital(self, err: SubOrbitalUnsafeError, now: float) -> StepReport:
        self.vessel.main_throttle = 0.0
        self._notify(str(err))
        return self._report(now, StepOutcome.SUB_ORBITAL)

    def _handle_depletion(self, err: ResourceDepletedError, now: float) -> StepReport:
        throttle = self.sampled.throttle
        if throttle <= 0.0:
            return self._report(now, StepOutcome.DEPLETED, throttle=throttle)

        self._notify(DEPLETED_MESSAGE)
        logger.info("[PersistentThrust] %s: %s", self.name, err)
        # Synchronous: the next step already runs in real time
        self.host.exit_acceleration()
        self.regime.force_real_time()
        return self._report(now, StepOutcome.DEPLETED_EXIT, throttle=throttle)

    def _handle_integration_error(self, err: IntegrationError, now: float) -> StepReport:
        self.diagnostics.log(f"[PersistentThrust] {self.name} skipped step: {err}")
        return self._report(now, StepOutcome.SKIPPED)

    def _report(
        self,
        now: float,
        outcome: StepOutcome,
        result: IntegrationResult | None = None,
        thrust: float = 0.0,
        isp: float = 0.0,
        throttle: float = 0.0,
        sampled: bool = False,
    ) -> StepReport:
        if result is None:
            delta_v = np.zeros(3)
            demand = 0.0
        else:
            delta_v = result.delta_v
            demand = result.propellant_demand
        return StepReport(
            step=self._step,
            time=now,
            regime=self.regime.state,
            outcome=outcome,
            delta_v=delta_v,
            propellant_demand=demand,
            thrust=thrust,
            specific_impulse=isp,
            throttle=throttle,
            sampled=sampled,
        )
