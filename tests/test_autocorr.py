"""
Tests for ptuner/autocorr.py: the windowed squared error, the pruned
phase search, and phase averaging.
"""

import numpy as np
import pytest

from ptuner.autocorr import (
    average_phase,
    best_phase,
    error_curve,
    phase_search,
    window_error,
)
from ptuner.errors import PrecondViolation

PHASE_MIN = 401
PHASE_MAX = 802
WINDOW = 2 * PHASE_MAX


def reference_error(samples, offset, length, limit):
    """Sample-by-sample scan that stops once the limit is reached."""
    error = 0
    for i in range(length):
        diff = int(samples[i]) - int(samples[i + offset])
        error += diff * diff
        if error >= limit:
            break
    return error


# ---------------------------------------------------------------------------
# window_error
# ---------------------------------------------------------------------------


class TestWindowError:
    def test_unbounded_is_full_sum(self, rng):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        expected = sum(
            (int(samples[i]) - int(samples[i + 500])) ** 2 for i in range(PHASE_MAX)
        )
        assert window_error(samples, 500, PHASE_MAX) == expected
        assert window_error(samples, 500, PHASE_MAX, limit=None) == expected

    def test_u64_max_limit_never_stops_early(self, rng):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        full = window_error(samples, 450, PHASE_MAX)
        assert window_error(samples, 450, PHASE_MAX, limit=2**64 - 1) == full

    def test_tight_limit_stops_on_a_prefix(self, rng):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        full = window_error(samples, 600, PHASE_MAX)
        limit = full // 3
        partial = window_error(samples, 600, PHASE_MAX, limit=limit)
        assert limit <= partial < full

    @pytest.mark.parametrize("fraction", [0.0, 0.001, 0.1, 0.5, 0.9, 0.999, 1.0, 2.0])
    def test_matches_sample_by_sample_scan(self, rng, fraction):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        full = window_error(samples, 700, PHASE_MAX)
        limit = int(full * fraction)
        assert window_error(samples, 700, PHASE_MAX, limit=limit) == reference_error(
            samples, 700, PHASE_MAX, limit
        )

    def test_no_overflow(self):
        # every difference is 65535, squares are near 2^32
        samples = np.tile(np.array([32767, -32768], dtype=np.int16), PHASE_MAX)
        assert window_error(samples, 1, PHASE_MAX) == PHASE_MAX * 65535**2

    def test_identical_shift_is_zero(self, periodic):
        samples = periodic(500, WINDOW)
        assert window_error(samples, 500, PHASE_MAX) == 0

    def test_window_too_short(self):
        with pytest.raises(PrecondViolation):
            window_error(np.zeros(100, dtype=np.int16), 60, 50)

    def test_rejects_multichannel(self):
        with pytest.raises(PrecondViolation, match="one-dimensional"):
            window_error(np.zeros((10, 2), dtype=np.int16), 1, 2)


# ---------------------------------------------------------------------------
# best_phase / phase_search
# ---------------------------------------------------------------------------


class TestBestPhase:
    @pytest.mark.parametrize("period", [401, 450, 500, 535, 700, 801])
    def test_periodic_window(self, periodic, period):
        samples = periodic(period, WINDOW)
        assert phase_search(samples, PHASE_MIN, PHASE_MAX) == (period, 0)
        assert best_phase(samples, PHASE_MIN, PHASE_MAX) == period

    def test_ties_keep_smallest_phase(self):
        # silence matches itself at every shift
        samples = np.zeros(WINDOW, dtype=np.int16)
        assert best_phase(samples, PHASE_MIN, PHASE_MAX) == PHASE_MIN

    def test_single_candidate(self, rng):
        samples = rng.integers(-1000, 1000, size=40, dtype=np.int16)
        assert best_phase(samples, 10, 11) == 10

    def test_sine_wave(self):
        # low E: 44100 / 82.4069 = 535.15 samples per cycle
        t = np.arange(WINDOW)
        samples = (8192 * np.sin(2 * np.pi * 82.4069 * t / 44100)).astype(np.int16)
        assert best_phase(samples, PHASE_MIN, PHASE_MAX) == 535

    def test_longer_window_is_fine(self, periodic):
        samples = periodic(612, 3 * WINDOW)
        assert best_phase(samples, PHASE_MIN, PHASE_MAX) == 612

    def test_short_window_raises(self):
        with pytest.raises(PrecondViolation, match="too short"):
            best_phase(np.zeros(WINDOW - 1, dtype=np.int16), PHASE_MIN, PHASE_MAX)

    @pytest.mark.parametrize("phase_min, phase_max", [(0, 10), (10, 10), (12, 10)])
    def test_bad_range_raises(self, phase_min, phase_max):
        with pytest.raises(PrecondViolation, match="Bad phase search range"):
            best_phase(np.zeros(100, dtype=np.int16), phase_min, phase_max)

    def test_agrees_with_error_curve(self, rng):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        curve = error_curve(samples, PHASE_MIN, PHASE_MAX)
        best, error = phase_search(samples, PHASE_MIN, PHASE_MAX)
        assert best == PHASE_MIN + int(np.argmin(curve))
        assert error == curve.min()


class TestErrorCurve:
    def test_shape_and_values(self, rng):
        samples = rng.integers(-32768, 32768, size=WINDOW, dtype=np.int16)
        curve = error_curve(samples, PHASE_MIN, PHASE_MAX)
        assert curve.shape == (PHASE_MAX - PHASE_MIN,)
        assert curve[99] == window_error(samples, PHASE_MIN + 99, PHASE_MAX)

    def test_zero_at_period(self, periodic):
        curve = error_curve(periodic(450, WINDOW), PHASE_MIN, PHASE_MAX)
        assert curve[450 - PHASE_MIN] == 0
        assert (curve > 0).sum() == len(curve) - 1


# ---------------------------------------------------------------------------
# average_phase
# ---------------------------------------------------------------------------


class TestAveragePhase:
    def test_constant_period(self, periodic):
        samples = periodic(500, 5000)
        assert average_phase(samples, [0, 137, 1000, 3000], PHASE_MIN, PHASE_MAX) == 500.0

    def test_fractional_average(self, periodic):
        samples = np.concatenate([periodic(450, WINDOW), periodic(501, WINDOW)])
        assert average_phase(samples, [0, WINDOW], PHASE_MIN, PHASE_MAX) == 475.5

    def test_no_offsets_raises(self, periodic):
        with pytest.raises(PrecondViolation):
            average_phase(periodic(500, WINDOW), [], PHASE_MIN, PHASE_MAX)

    def test_offset_too_close_to_end(self, periodic):
        with pytest.raises(PrecondViolation, match="too short"):
            average_phase(periodic(500, WINDOW), [1], PHASE_MIN, PHASE_MAX)
