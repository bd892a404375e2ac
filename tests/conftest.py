"""Pytest fixtures for tracelens tests."""

import numpy as np
import pytest

from tracelens.core.domain.config import SummaryConfig
from tracelens.core.shared.events import Event
from tracelens.services.summarize import VariableSummarizer


@pytest.fixture
def rng():
    """Seeded generator so every test sees the same draws."""
    return np.random.default_rng(42)


@pytest.fixture
def normal_samples(rng):
    """1000 standard-normal draws."""
    return rng.normal(0.0, 1.0, 1000)


@pytest.fixture
def single_chain_trace(rng):
    """Two-variable single-chain trace, deliberately inserted out of name order."""
    return {
        "sigma": rng.gamma(2.0, 1.0, 200),
        "mu": rng.normal(1.0, 0.5, 200),
    }


@pytest.fixture
def multi_chain_traces(rng):
    """Four well-mixed chains of two variables."""
    return [
        {
            "mu": rng.normal(0.0, 1.0, 150),
            "tau": rng.normal(3.0, 0.2, 150),
        }
        for _ in range(4)
    ]


@pytest.fixture
def sample_stats():
    """Per-draw sampler stats for a 20-draw chain with two divergences."""
    stats = [{"energy": 10.0 + i, "divergent": False} for i in range(20)]
    stats[3]["divergent"] = True
    stats[11]["divergent"] = True
    return stats


@pytest.fixture
def summarizer():
    """Summarizer with a small ACF lag to keep tests quick."""
    return VariableSummarizer(SummaryConfig(max_acf_lag=10))


class RecordingConsumer:
    """Test double that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def handle(self, event: Event) -> None:
        self.events.append(event)


@pytest.fixture
def recorder():
    return RecordingConsumer()


@pytest.fixture
def sample_config_file(tmp_path):
    """Create a sample TOML configuration file."""
    config_path = tmp_path / "tracelens.toml"
    content = """
[summary]
num_bins = 40
max_acf_lag = 25
hdi_masses = [0.5, 0.89]

[stream]
flush_batch_size = 25
"""
    config_path.write_text(content)
    return config_path
