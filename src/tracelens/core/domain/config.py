"""Configuration models for tracelens."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogFormat = Literal["text", "json"]


class SummaryConfig(BaseModel):
    """Configuration for the batch and live summarizers.

    Example TOML:
        [summary]
        num_bins = 30
        max_acf_lag = 40
        hdi_masses = [0.5, 0.94]
    """

    model_config = ConfigDict(extra="forbid")

    num_bins: Annotated[int, Field(ge=1)] = Field(
        default=30,
        description="Bin count for marginal, energy and pair-plot histograms.",
    )
    max_acf_lag: Annotated[int, Field(ge=0)] = Field(
        default=40,
        description="Largest autocorrelation lag reported (clamped to n - 1).",
    )
    rank_bins: Annotated[int, Field(ge=1)] = Field(
        default=20,
        description="Bin count for rank histograms.",
    )
    ppc_bins: Annotated[int, Field(ge=1)] = Field(
        default=30,
        description="Bin count for posterior predictive histograms.",
    )
    hdi_masses: tuple[float, float] = Field(
        default=(0.5, 0.94),
        description="Credible masses of the inner and outer forest-plot intervals.",
    )

    @field_validator("hdi_masses")
    @classmethod
    def validate_hdi_masses(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Require two masses in (0, 1] with the inner one not wider than the outer."""
        inner, outer = v
        if not (0 < inner <= 1 and 0 < outer <= 1):
            msg = "HDI masses must lie in (0, 1]"
            raise ValueError(msg)
        if inner > outer:
            msg = "Inner HDI mass must not exceed the outer one"
            raise ValueError(msg)
        return v


class StreamConfig(BaseModel):
    """Configuration for the streaming coordinator and live consumer."""

    model_config = ConfigDict(extra="forbid")

    flush_batch_size: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description="Pending draws that trigger a flush to the consumer.",
    )
    min_samples_for_display: Annotated[int, Field(ge=1)] = Field(
        default=5,
        description="Draws required before the live consumer builds summaries.",
    )


class LoggingConfig(BaseModel):
    """Log file settings."""

    model_config = ConfigDict(extra="forbid")

    verbose: bool = Field(default=False, description="Mirror log records to the console.")
    log_format: LogFormat = Field(
        default="text",
        description="Format for log file: text (human-readable) or json (structured).",
    )


class TraceLensConfig(BaseModel):
    """Top-level configuration.

    Example TOML configuration:
        [summary]
        num_bins = 40

        [stream]
        flush_batch_size = 25

        [logging]
        verbose = true
    """

    model_config = ConfigDict(extra="forbid")

    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    stream: StreamConfig = Field(default_factory=StreamConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


__all__ = [
    "LogFormat",
    "LoggingConfig",
    "StreamConfig",
    "SummaryConfig",
    "TraceLensConfig",
]
