"""Pointer and keyboard handling for the Julia set generating parameter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .renderer import map_range

ACTIVATE_TRACKING_KEY = "space"


@dataclass(frozen=True)
class KeyDown:
    key: str


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerButtonDown:
    pass


@dataclass(frozen=True)
class Quit:
    pass


InputEvent = Union[KeyDown, PointerMove, PointerButtonDown, Quit]


class TrackingMode(enum.Enum):
    IDLE = "idle"
    TRACKING = "tracking"


def update_parameter_from_pointer(x: float, y: float, width: int, height: int) -> complex:
    """Map a pointer position onto the ``[-1, 1]`` square of the complex plane.

    Positions outside the window are mapped with the same affine formula and
    may land outside the square.
    """

    real_part = map_range(x, 0, width, -1.0, 1.0)
    imag_part = map_range(y, 0, height, -1.0, 1.0)
    return complex(real_part, imag_part)


@dataclass
class InteractionController:
    """Two-state machine that lets the pointer drag the generating parameter.

    ``IDLE`` switches to ``TRACKING`` on the activation key. While tracking,
    every pointer move recomputes ``parameter`` and a button press returns to
    ``IDLE``. Everything else leaves the state untouched.
    """

    width: int
    height: int
    parameter: complex
    mode: TrackingMode = field(default=TrackingMode.IDLE)

    @property
    def tracking(self) -> bool:
        return self.mode is TrackingMode.TRACKING

    def handle(self, event: Any) -> Optional[InputEvent]:
        """Apply ``event`` and return it when it belongs to the host instead."""

        if isinstance(event, KeyDown):
            if event.key != ACTIVATE_TRACKING_KEY:
                return event
            if self.mode is TrackingMode.IDLE:
                self.mode = TrackingMode.TRACKING
            return None

        if isinstance(event, PointerMove):
            if self.mode is TrackingMode.TRACKING:
                self.parameter = update_parameter_from_pointer(event.x, event.y, self.width, self.height)
            return None

        if isinstance(event, PointerButtonDown):
            if self.mode is TrackingMode.TRACKING:
                self.mode = TrackingMode.IDLE
            return None

        return event
