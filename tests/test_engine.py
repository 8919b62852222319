import numpy as np
import pytest

from juliaset import (
    ACTIVATE_TRACKING_KEY,
    DEFAULT_PARAMETER,
    ConfigurationError,
    KeyDown,
    PointerButtonDown,
    PointerMove,
    Quit,
    colorize,
    handle_input_event,
    initialize,
    render_frame,
    update_parameter_from_pointer,
)


def _escape_count(z, c, radius, max_iterations):
    count = 0
    while count < max_iterations and abs(z) <= radius:
        z = z * z + c
        count += 1
    return count


def test_initialize_defaults():
    state = initialize(64, 48)
    assert state.config.width == 64
    assert state.config.height == 48
    assert state.config.max_iterations == 300
    assert state.config.escape_radius == 2.0
    assert state.parameter == complex(0.282, -0.58)
    assert DEFAULT_PARAMETER == complex(0.282, -0.58)


@pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-1, -1)])
def test_initialize_rejects_bad_dimensions(width, height):
    with pytest.raises(ConfigurationError):
        initialize(width, height)


def test_render_frame_returns_buffer_and_label():
    state = initialize(40, 30)
    pixels, label = render_frame(state)
    assert pixels.shape == (30, 40)
    assert pixels.size == 40 * 30
    assert pixels.dtype == np.uint32
    assert label == "c = 0.282 -0.580i"


def test_initialize_rejects_fractional_dimensions():
    with pytest.raises(ConfigurationError):
        initialize(10.5, 4)


def test_flattened_buffer_has_one_word_per_pixel():
    state = initialize(10, 4)
    pixels, _ = state.render_frame()
    flat = pixels.reshape(-1)
    assert len(flat) == 10 * 4
    assert np.shares_memory(flat, pixels)
    assert int(flat[2 * 10 + 3]) == int(pixels[2, 3])


def test_render_frame_buffer_is_read_only():
    state = initialize(16, 16)
    pixels, _ = state.render_frame()
    with pytest.raises(ValueError):
        pixels[0, 0] = 0


def test_render_frame_twice_is_bit_identical():
    state = initialize(48, 32)
    first, _ = state.render_frame()
    first = first.copy()
    second, _ = state.render_frame()
    np.testing.assert_array_equal(first, second)


def test_render_frame_reuses_owned_buffer():
    state = initialize(20, 20)
    first, _ = state.render_frame()
    second, _ = state.render_frame()
    assert np.shares_memory(first, second)


def test_centre_pixel_matches_direct_recurrence():
    state = initialize(100, 100)
    pixels, _ = state.render_frame()
    expected = _escape_count(0j, complex(0.282, -0.58), 2.0, 300)
    assert int(pixels[50, 50]) == colorize(expected, 300)


def test_tracking_changes_next_frame():
    state = initialize(40, 40)
    before, label_before = state.render_frame()
    before = before.copy()

    for event in [KeyDown(ACTIVATE_TRACKING_KEY), PointerMove(5, 35), PointerButtonDown()]:
        assert handle_input_event(state, event) is None

    after, label_after = state.render_frame()
    assert state.parameter == update_parameter_from_pointer(5, 35, 40, 40)
    assert label_after == "c = -0.750 +0.750i"
    assert label_after != label_before
    assert not np.array_equal(before, after)


def test_quit_is_forwarded_to_host():
    state = initialize(10, 10)
    event = Quit()
    assert handle_input_event(state, event) is event
    assert state.parameter == DEFAULT_PARAMETER
