"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w

from tracelens.core.domain.config import TraceLensConfig


def load_config(path: Path) -> TraceLensConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        TraceLensConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        pydantic.ValidationError: If the configuration is invalid.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        data = tomllib.load(f)

    return TraceLensConfig.model_validate(data)


def save_config(config: TraceLensConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    data = config.model_dump(mode="json", exclude_none=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# tracelens configuration file

[summary]
num_bins = 30        # marginal, energy and pair-plot histograms
max_acf_lag = 40     # clamped to n - 1
rank_bins = 20
ppc_bins = 30
hdi_masses = [0.5, 0.94]

[stream]
flush_batch_size = 10         # pending draws per flush
min_samples_for_display = 5   # draws before the first live frame

[logging]
verbose = false
log_format = "text"  # text or json
"""
