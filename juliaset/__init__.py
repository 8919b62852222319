"""Public API for interactive Julia set rendering."""

from .controller import (
    ACTIVATE_TRACKING_KEY,
    InteractionController,
    KeyDown,
    PointerButtonDown,
    PointerMove,
    Quit,
    TrackingMode,
    update_parameter_from_pointer,
)
from .engine import DEFAULT_PARAMETER, EngineState, handle_input_event, initialize, render_frame
from .renderer import (
    ConfigurationError,
    RenderConfig,
    colorize,
    colorize_iterations,
    compute_iterations,
    format_parameter_label,
    iterations_to_escape,
    map_range,
    pixel_to_complex,
    render,
    to_rgba,
)

__all__ = [
    "ACTIVATE_TRACKING_KEY",
    "ConfigurationError",
    "DEFAULT_PARAMETER",
    "EngineState",
    "InteractionController",
    "KeyDown",
    "PointerButtonDown",
    "PointerMove",
    "Quit",
    "RenderConfig",
    "TrackingMode",
    "colorize",
    "colorize_iterations",
    "compute_iterations",
    "format_parameter_label",
    "handle_input_event",
    "initialize",
    "iterations_to_escape",
    "map_range",
    "pixel_to_complex",
    "render",
    "render_frame",
    "to_rgba",
    "update_parameter_from_pointer",
]
