"""Operating point sources for single and multi-mode engines.

The persistent engine never inspects how many physical configurations an
engine has. It asks its source for the currently active configuration on
every step, so a mode switch simply changes what the source returns.

Example:
    >>> from persistent_thrust.modes import MultiModeEngine
    >>> from persistent_thrust.simulation import FixedEngine
    >>>
    >>> modes = MultiModeEngine(
    ...     primary=FixedEngine(max_thrust=60000.0, real_specific_impulse=320.0),
    ...     secondary=FixedEngine(max_thrust=15000.0, real_specific_impulse=800.0),
    ... )
    >>> modes.toggle()
    >>> modes.current_engine().real_specific_impulse
    800.0
"""

from dataclasses import dataclass

from beartype import beartype

from persistent_thrust.interfaces import EngineHardware


@beartype
@dataclass
class SingleModeEngine:
    """Source that always returns the same engine."""
    engine: EngineHardware

    def current_engine(self) -> EngineHardware:
        return self.engine


@beartype
@dataclass
class MultiModeEngine:
    """Source switching between a primary and a secondary configuration.

    Attributes:
        primary: Configuration used while ``running_primary`` is True
        secondary: Configuration used otherwise
        running_primary: Active mode flag, owned by the mode selector
    """
    primary: EngineHardware
    secondary: EngineHardware
    running_primary: bool = True

    def current_engine(self) -> EngineHardware:
        return self.primary if self.running_primary else self.secondary

    def toggle(self) -> None:
        self.running_primary = not self.running_primary
