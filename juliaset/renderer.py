"""Rendering primitives for Julia set frames."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

OPAQUE_BLACK = 0xFF000000


class ConfigurationError(ValueError):
    """Raised when a render configuration cannot produce a frame."""


@dataclass(frozen=True)
class RenderConfig:
    """Session constants that describe every render of a Julia set."""

    width: int
    height: int
    max_iterations: int = 300
    escape_radius: float = 2.0

    def __post_init__(self) -> None:
        for name in ("width", "height", "max_iterations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"frame dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.escape_radius <= 0:
            raise ConfigurationError(f"escape_radius must be positive, got {self.escape_radius}")

    @property
    def imaginary_extent(self) -> float:
        return self.escape_radius * self.height / self.width


def map_range(value, in_min, in_max, out_min, out_max):
    """Affinely remap ``value`` from ``[in_min, in_max]`` to ``[out_min, out_max]``.

    Accepts scalars or numpy arrays; both follow the same operation order so
    the results agree bit for bit.
    """

    return out_min + (out_max - out_min) * ((value - in_min) / (in_max - in_min))


def iterations_to_escape(z0: complex, c: complex, radius: float, max_iterations: int) -> int:
    """Count applications of ``z -> z*z + c`` before ``|z|`` exceeds ``radius``."""

    z = complex(z0)
    c = complex(c)
    i = 0
    while abs(z) <= radius and i < max_iterations:
        z = z * z + c
        i += 1
    return i


def pixel_to_complex(px: float, py: float, width: int, height: int, radius: float) -> complex:
    extent = radius * height / width
    x0 = map_range(px, 0, width, -radius, radius)
    y0 = map_range(py, 0, height, -extent, extent)
    return complex(x0, y0)


def _sampling_grid(config: RenderConfig) -> tuple[np.ndarray, np.ndarray]:
    radius = config.escape_radius
    extent = config.imaginary_extent
    cols = np.arange(config.width, dtype=np.float64)
    rows = np.arange(config.height, dtype=np.float64)
    x = map_range(cols, 0, config.width, -radius, radius)
    y = map_range(rows, 0, config.height, -extent, extent)
    return x, y


@tf.function
def _julia_step(
    zr: tf.Tensor,
    zi: tf.Tensor,
    ns: tf.Tensor,
    active: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    radius: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single Julia iteration for points that have not escaped."""

    zr_new = zr * zr - zi * zi + cr
    zi_new = zr * zi + zi * zr + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    ns = ns + tf.cast(active, tf.int32)
    az = tf.abs(tf.complex(zr, zi))
    new_active = tf.logical_and(active, az <= radius)
    return zr, zi, ns, new_active


@tf.function
def _julia_run(
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    radius: tf.Tensor,
    max_iterations: tf.Tensor,
) -> tf.Tensor:
    """Iterate the Julia recurrence using a TensorFlow while loop."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(zr, tf.int32)
    active = tf.abs(tf.complex(zr, zi)) <= radius

    def cond(i, zr, zi, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, ns, active):
        zr, zi, ns, active = _julia_step(zr, zi, ns, active, cr, ci, radius)
        return i + 1, zr, zi, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, zr, zi, ns, active))
    return ns


def compute_iterations(c: complex, config: RenderConfig, *, device: Optional[str] = None) -> np.ndarray:
    """Return the escape-time count of every pixel as a ``(height, width)`` array."""

    c = complex(c)
    x, y = _sampling_grid(config)

    with tf.device(device if device is not None else "/CPU:0"):
        x_tf = tf.convert_to_tensor(x, dtype=tf.float64)
        y_tf = tf.convert_to_tensor(y, dtype=tf.float64)
        X, Y = tf.meshgrid(x_tf, y_tf)
        ns = _julia_run(
            X,
            Y,
            tf.constant(c.real, dtype=tf.float64),
            tf.constant(c.imag, dtype=tf.float64),
            tf.constant(config.escape_radius, dtype=tf.float64),
            tf.constant(config.max_iterations, dtype=tf.int32),
        )

    return ns.numpy()


def _palette(t):
    r = 9 * (1 - t) * t * t * t * 255
    g = 15 * (1 - t) * (1 - t) * t * t * 255
    b = 8.5 * (1 - t) * (1 - t) * (1 - t) * t * 255
    return r, g, b


def colorize(iteration: int, max_iterations: int) -> int:
    """Pack the palette color for one escape-time count as an ARGB word."""

    if iteration >= max_iterations:
        return OPAQUE_BLACK
    t = iteration / max_iterations
    r, g, b = (min(max(int(round(v)), 0), 255) for v in _palette(t))
    return (255 << 24) | (r << 16) | (g << 8) | b


def colorize_iterations(iterations: np.ndarray, max_iterations: int) -> np.ndarray:
    """Array form of :func:`colorize`, returning packed ``uint32`` ARGB values."""

    iterations = np.asarray(iterations)
    t = iterations.astype(np.float64) / np.float64(max_iterations)
    r, g, b = (np.clip(np.rint(v), 0, 255).astype(np.uint32) for v in _palette(t))
    packed = np.uint32(255 << 24) | (r << np.uint32(16)) | (g << np.uint32(8)) | b
    inside = iterations >= max_iterations
    return np.where(inside, np.uint32(OPAQUE_BLACK), packed).astype(np.uint32)


def render(c: complex, config: RenderConfig, *, device: Optional[str] = None) -> np.ndarray:
    """Render a full ARGB frame of the Julia set for parameter ``c``."""

    iterations = compute_iterations(c, config, device=device)
    return np.ascontiguousarray(colorize_iterations(iterations, config.max_iterations))


def to_rgba(pixels: np.ndarray) -> np.ndarray:
    """Unpack ARGB words into an ``(height, width, 4)`` RGBA byte array."""

    pixels = np.asarray(pixels, dtype=np.uint32)
    rgba = np.empty(pixels.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = (pixels >> 16) & 0xFF
    rgba[..., 1] = (pixels >> 8) & 0xFF
    rgba[..., 2] = pixels & 0xFF
    rgba[..., 3] = (pixels >> 24) & 0xFF
    return rgba


def format_parameter_label(c: complex) -> str:
    c = complex(c)
    return f"c = {c.real:.3f} {c.imag:+.3f}i"
