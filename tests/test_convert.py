"""
Tests for ptuner/convert.py: pitch, phase and frequency conversions.
"""

import pytest

from ptuner.config import TunerConfig
from ptuner.convert import fractional_pitch, hertz, nearest_pitch, phase, pitch_hertz


class TestPhase:
    def test_reference_pitch(self, guitar_config):
        # 44100 / 440 = 100.23
        assert phase(0, guitar_config) == 100

    @pytest.mark.parametrize(
        "pitch, expected",
        [(-29, 535), (-24, 401), (-19, 300), (-14, 225), (-10, 179), (-5, 134), (12, 50)],
    )
    def test_guitar_strings(self, guitar_config, pitch, expected):
        assert phase(pitch, guitar_config) == expected

    def test_octave_doubles_phase(self, guitar_config):
        assert phase(-12, guitar_config) == 200
        assert phase(-24, guitar_config) == 401

    def test_returns_int(self, guitar_config):
        assert isinstance(phase(-29, guitar_config), int)

    def test_depends_on_reference_and_rate(self):
        config = TunerConfig.from_tuning("A4", reference=441.0, sample_rate=44100)
        assert phase(0, config) == 100
        config = TunerConfig.from_tuning("A4", reference=440.0, sample_rate=8800)
        assert phase(0, config) == 20


class TestFractionalPitch:
    def test_reference_is_zero(self):
        config = TunerConfig.from_tuning("A4", reference=441.0, sample_rate=44100)
        assert fractional_pitch(100, config) == pytest.approx(0.0)

    def test_octave_is_twelve(self):
        config = TunerConfig.from_tuning("A4", reference=441.0, sample_rate=44100)
        assert fractional_pitch(200, config) == pytest.approx(-12.0)
        assert fractional_pitch(50, config) == pytest.approx(12.0)

    def test_accepts_fractional_phase(self, guitar_config):
        exact = 44100 / 440.0
        assert fractional_pitch(exact, guitar_config) == pytest.approx(0.0)

    def test_inverts_phase(self, guitar_config):
        for pitch in range(-48, 13):
            target = phase(pitch, guitar_config)
            back = int(round(fractional_pitch(target, guitar_config)))
            assert back == pitch
            assert phase(back, guitar_config) == target


class TestNearestPitch:
    def test_sharp_and_flat(self, guitar_config):
        # the exact phase of A4 is 100.23 samples
        pitch, cents = nearest_pitch(100, guitar_config)
        assert pitch == 0
        assert cents > 0
        pitch, cents = nearest_pitch(101, guitar_config)
        assert pitch == 0
        assert cents < 0

    def test_cents_value(self, guitar_config):
        pitch, cents = nearest_pitch(101, guitar_config)
        assert cents == pytest.approx(-13.3, abs=0.1)

    def test_low_e(self, guitar_config):
        pitch, cents = nearest_pitch(535, guitar_config)
        assert pitch == -29
        assert abs(cents) < 5


class TestHertz:
    def test_hertz(self, guitar_config):
        assert hertz(100, guitar_config) == pytest.approx(441.0)
        assert hertz(401, guitar_config) == pytest.approx(109.975, abs=1e-3)

    def test_pitch_hertz(self, guitar_config):
        assert pitch_hertz(0, guitar_config) == pytest.approx(440.0)
        assert pitch_hertz(-24, guitar_config) == pytest.approx(110.0)
        assert pitch_hertz(-29, guitar_config) == pytest.approx(82.4069, abs=1e-4)
