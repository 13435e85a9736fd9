"""Configuration surface for persistent engines.

Example:
    >>> from persistent_thrust.config import PersistentThrustConfig
    >>> config = PersistentThrustConfig(persistent_enabled=True)
    >>> config.sample_period
    16
"""

from dataclasses import dataclass

from beartype import beartype

# Steps between samples of the live engine operating point
DEFAULT_SAMPLE_PERIOD = 16

# How long on-screen diagnostics stay visible [s]
DEFAULT_MESSAGE_DURATION = 5.0


@beartype
@dataclass
class PersistentThrustConfig:
    """Per-engine persistent thrust options.

    Attributes:
        persistent_enabled: Feature toggle; turning it off disables the engine
        request_massless_propellant: Request components with zero density
        request_massed_propellant: Request components with positive density
        sample_period: Steps between samples of the live operating point
        message_duration: Lifetime of on-screen messages [s]
        record_history: Keep a StepReport for every advance() call
    """
    persistent_enabled: bool = False
    request_massless_propellant: bool = False
    request_massed_propellant: bool = True
    sample_period: int = DEFAULT_SAMPLE_PERIOD
    message_duration: float = DEFAULT_MESSAGE_DURATION
    record_history: bool = False

    def __post_init__(self) -> None:
        """Validate cadence and message settings."""
        if self.sample_period < 1:
            raise ValueError(f"sample_period must be >= 1, got {self.sample_period}")
        if self.message_duration <= 0:
            raise ValueError(
                f"message_duration must be positive, got {self.message_duration}"
            )
