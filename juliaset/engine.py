"""Session state tying the interaction controller to the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from .controller import InputEvent, InteractionController
from .renderer import RenderConfig, format_parameter_label, render

DEFAULT_PARAMETER = complex(0.282, -0.58)


@dataclass
class EngineState:
    """Render configuration, controller and the frame buffer they share.

    The buffer returned by :meth:`render_frame` is a read-only view of memory
    that the next call overwrites in place; copy it if it must outlive the
    frame.
    """

    config: RenderConfig
    controller: InteractionController
    device: Optional[str] = None
    _pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._pixels = np.zeros((self.config.height, self.config.width), dtype=np.uint32)

    @property
    def parameter(self) -> complex:
        return self.controller.parameter

    def handle_input_event(self, event: Any) -> Optional[InputEvent]:
        return self.controller.handle(event)

    def render_frame(self) -> tuple[np.ndarray, str]:
        """Render the current parameter and return ``(pixels, label)``.

        ``pixels`` has shape ``(height, width)``, so ``pixels.size`` (not
        ``len``) equals ``width * height``; ``pixels.reshape(-1)`` is the
        row-major buffer without a copy.
        """
        c = self.controller.parameter
        np.copyto(self._pixels, render(c, self.config, device=self.device))
        view = self._pixels.view()
        view.flags.writeable = False
        return view, format_parameter_label(c)


def initialize(width: int, height: int, *, device: Optional[str] = None) -> EngineState:
    """Build a session with default iteration count, radius and parameter."""

    config = RenderConfig(width=width, height=height)
    controller = InteractionController(width=width, height=height, parameter=DEFAULT_PARAMETER)
    return EngineState(config=config, controller=controller, device=device)


def handle_input_event(state: EngineState, event: Any) -> Optional[InputEvent]:
    return state.handle_input_event(event)


def render_frame(state: EngineState) -> tuple[np.ndarray, str]:
    return state.render_frame()
