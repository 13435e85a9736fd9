"""Persistent Thrust - continuous engine thrust across real and accelerated time.

This package keeps an engine thrusting while the host simulation switches
between frame-by-frame physics and large accelerated time steps. Thrust is
integrated with the rocket equation over each accelerated step, propellant is
drawn from a shared resource store, and the switch back to real time is
handled without throttle or trajectory jumps.

Example:
    >>> from persistent_thrust import PersistentEngine, PersistentThrustConfig
    >>> from persistent_thrust.propellants import PropellantComponent
    >>>
    >>> engine = PersistentEngine(
    ...     source=hardware,          # EngineHardware or multi-mode source
    ...     vessel=vessel,            # VesselModel
    ...     store=tanks,              # ResourceStore
    ...     host=time_warp,           # HostRegime
    ...     components=[
    ...         PropellantComponent.from_resource("LiquidFuel", 0.9),
    ...         PropellantComponent.from_resource("Oxidizer", 1.1),
    ...     ],
    ...     config=PersistentThrustConfig(persistent_enabled=True),
    ... )
    >>> report = engine.advance()  # once per fixed step
"""

__version__ = "0.1.0"

# Configuration and errors
from persistent_thrust.config import PersistentThrustConfig

# Demand resolution
from persistent_thrust.demand import ComponentDemand, DemandResolver, DemandResult
from persistent_thrust.diagnostics import LoggingDiagnostics, ScreenMessage

# Engine facade
from persistent_thrust.engine import PersistentEngine, Telemetry
from persistent_thrust.errors import (
    IntegrationError,
    InvalidMixtureError,
    MassNonPositiveError,
    PersistentThrustError,
    ResourceDepletedError,
    SubOrbitalUnsafeError,
)
from persistent_thrust.history import StepHistory, StepOutcome, StepReport

# Integration
from persistent_thrust.integrator import (
    STANDARD_GRAVITY,
    IntegrationResult,
    ThrustIntegrator,
)
from persistent_thrust.interfaces import VesselSituation
from persistent_thrust.modes import MultiModeEngine, SingleModeEngine

# Propellants
from persistent_thrust.propellants import (
    MASSLESS,
    PropellantComponent,
    PropellantMixture,
    get_resource_density,
    list_resources,
)

# Regime and sampling
from persistent_thrust.regime import RegimeController, RegimeDecision, RegimeState
from persistent_thrust.sampling import EngineSample, SampledEngineState, SamplingPolicy

__all__ = [
    # Version
    "__version__",
    # Configuration
    "PersistentThrustConfig",
    # Errors
    "PersistentThrustError",
    "InvalidMixtureError",
    "IntegrationError",
    "MassNonPositiveError",
    "ResourceDepletedError",
    "SubOrbitalUnsafeError",
    # Propellants
    "MASSLESS",
    "PropellantComponent",
    "PropellantMixture",
    "get_resource_density",
    "list_resources",
    # Sampling
    "EngineSample",
    "SampledEngineState",
    "SamplingPolicy",
    # Regime
    "RegimeController",
    "RegimeDecision",
    "RegimeState",
    # Integration
    "STANDARD_GRAVITY",
    "IntegrationResult",
    "ThrustIntegrator",
    # Demand
    "ComponentDemand",
    "DemandResolver",
    "DemandResult",
    # Engine
    "PersistentEngine",
    "Telemetry",
    "MultiModeEngine",
    "SingleModeEngine",
    "VesselSituation",
    "StepHistory",
    "StepOutcome",
    "StepReport",
    "LoggingDiagnostics",
    "ScreenMessage",
]
