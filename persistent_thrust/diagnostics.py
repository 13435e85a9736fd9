"""Default diagnostic sink backed by the logging module."""

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

from beartype import beartype

logger = logging.getLogger("persistent_thrust")


class ScreenMessage(NamedTuple):
    text: str
    duration: float  # [s]


@beartype
@dataclass
class LoggingDiagnostics:
    """Diagnostic sink that logs everything and keeps posted screen messages.

    Hosts with a real UI pass their own sink; this one is used when none is
    given and by the reference simulation.
    """
    messages: list[ScreenMessage] = field(default_factory=list)

    def post_message(self, text: str, duration: float) -> None:
        self.messages.append(ScreenMessage(text, duration))
        logger.warning(text)

    def log(self, line: str) -> None:
        logger.info(line)

    def clear(self) -> None:
        self.messages.clear()
