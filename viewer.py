import os
import sys
import time
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )


def configure_video_driver(environ):
    """Prefer SDL's X11 backend on Wayland sessions for proper window decorations."""
    if environ.get("WAYLAND_DISPLAY"):
        environ.setdefault("SDL_VIDEODRIVER", "x11")


configure_video_driver(os.environ)

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

import pygame

from juliaset import KeyDown, PointerButtonDown, PointerMove, Quit, initialize, to_rgba
from juliaset.overlay import draw_label

log("TensorFlow version: %s" % tf.__version__)

WIDTH = 1920
HEIGHT = 1080

# Keys the host treats as a request to close the window.
QUIT_KEYS = {"escape", "1"}


def select_device():
    """Pick the first visible GPU with memory growth enabled, else the CPU."""
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


from argparse import ArgumentParser


def build_parser():
    parser = ArgumentParser(description="Interactive Julia set viewer. Press space, move the mouse to "
                                        "change c, click to freeze it.")

    parser.add_argument('--show-label', dest='show_label', action='store_true',
                        help='draw the current parameter in a panel on top of the fractal')

    parser.add_argument('--fps', type=int, dest='fps', metavar='FPS', default=60,
                        help='upper bound on frames per second')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def translate_event(event):
    """Convert a pygame event into the engine's input vocabulary, or ``None``."""
    if event.type == pygame.QUIT:
        return Quit()
    if event.type == pygame.KEYDOWN:
        return KeyDown(pygame.key.name(event.key))
    if event.type == pygame.MOUSEMOTION:
        return PointerMove(*event.pos)
    if event.type == pygame.MOUSEBUTTONDOWN:
        return PointerButtonDown()
    return None


def wants_quit(event):
    return isinstance(event, Quit) or (isinstance(event, KeyDown) and event.key in QUIT_KEYS)


def main():
    parser = build_parser()
    opt = parser.parse_args()

    if opt.fps <= 0:
        parser.error("--fps must be a positive integer.")

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    device = select_device()
    state = initialize(WIDTH, HEIGHT, device=device)

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    frame_times = []
    running = True
    try:
        while running:
            for raw in pygame.event.get():
                event = translate_event(raw)
                if event is None:
                    continue
                unhandled = state.handle_input_event(event)
                if unhandled is not None and wants_quit(unhandled):
                    running = False

            t0 = time.perf_counter()
            pixels, label = state.render_frame()
            rgba = to_rgba(pixels)
            if opt.show_label:
                rgba = draw_label(rgba, label)
            surface = pygame.surfarray.make_surface(rgba[..., :3].swapaxes(0, 1))
            screen.blit(surface, (0, 0))
            pygame.display.set_caption(label)
            pygame.display.flip()
            frame_times.append((time.perf_counter() - t0) * 1000)

            log("{0} | {1:.1f}ms".format(label, frame_times[-1]), end='\r')
            clock.tick(opt.fps)
    finally:
        pygame.quit()

    if frame_times:
        avg_ms = sum(frame_times) / len(frame_times)
        print(f"Rendered {len(frame_times)} frames")
        print(f"Average frame time: {avg_ms:.1f}ms ({1000 / avg_ms:.0f} FPS)")


if __name__ == '__main__':
    main()
