"""Messages a sampler sends to the stream coordinator, one per draw."""

from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class StepStat:
    """Per-draw sampler statistics.

    Attributes:
        energy: Hamiltonian energy at the start of the trajectory, if captured
        divergent: Whether the integrator diverged on this step, if reported
        extra: Any further sampler-specific statistics (read-only)
    """

    energy: float | None = None
    divergent: bool | None = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, stat: Mapping[str, Any] | None) -> StepStat:
        """Build from a plain dict such as ``{"energy": 3.2, "divergent": False}``."""
        if stat is None:
            return cls()
        extra = {k: v for k, v in stat.items() if k not in ("energy", "divergent")}
        energy = stat.get("energy")
        if not isinstance(energy, numbers.Real) or isinstance(energy, (bool, np.bool_)):
            energy = None
        divergent = stat.get("divergent")
        # Only real booleans mark a divergence; 1 or "no" are not flags
        if not isinstance(divergent, (bool, np.bool_)):
            divergent = None
        return cls(
            energy=None if energy is None else float(energy),
            divergent=None if divergent is None else bool(divergent),
            extra=MappingProxyType(extra),
        )


@dataclass(frozen=True, slots=True)
class DrawMessage:
    """One draw emitted by the sampler.

    ``point_values`` is copied into a read-only mapping so the producer may
    reuse its own dict for the next draw.
    """

    draw_index: int
    point_values: Mapping[str, float]
    step_stat: StepStat = field(default_factory=StepStat)

    @classmethod
    def create(
        cls,
        draw_index: int,
        point_values: Mapping[str, float],
        step_stat: StepStat | Mapping[str, Any] | None = None,
    ) -> DrawMessage:
        if not isinstance(step_stat, StepStat):
            step_stat = StepStat.from_mapping(step_stat)
        values = MappingProxyType({name: float(v) for name, v in point_values.items()})
        return cls(draw_index=draw_index, point_values=values, step_stat=step_stat)


@dataclass(frozen=True, slots=True)
class DoneMessage:
    """Sent once after the sampler's last draw."""

    total_count: int


__all__ = ["DoneMessage", "DrawMessage", "StepStat"]
