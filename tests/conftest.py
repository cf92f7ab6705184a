import matplotlib

# never open windows while testing
matplotlib.use("Agg")

import numpy as np
import pytest

from ptuner.config import TunerConfig, target_table


@pytest.fixture
def guitar_config():
    return TunerConfig.from_tuning("E2 A2 D3 G3 B3 E4")


@pytest.fixture
def guitar_table(guitar_config):
    return target_table(guitar_config)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def periodic(rng):
    """Builds windows of random int16 noise repeating every `period` samples."""

    def make(period, length):
        cycle = rng.integers(-20000, 20000, size=period, dtype=np.int16)
        return np.resize(cycle, length)

    return make
