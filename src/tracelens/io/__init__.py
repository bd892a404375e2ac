"""File I/O for tracelens (configuration only; samples are never persisted)."""

from tracelens.io.config import generate_default_config, load_config, save_config

__all__ = ["generate_default_config", "load_config", "save_config"]
