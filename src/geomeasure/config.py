"""Measurement settings."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "GEOMEASURE_"


class MeasureSettings(BaseModel):
    """Tuning knobs for a MeasureOperator. None of them change results."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    envelope_pruning: bool = Field(
        default=True,
        description="Skip collection elements whose bounding box is farther than the best distance so far",
    )
    cache_envelopes: bool = Field(
        default=True,
        description="Keep computed envelopes of immutable geometries for the operator's lifetime",
    )
    cache_limit: int = Field(default=4096, ge=0, description="Maximum cached envelopes")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MeasureSettings:
        """Build settings from ``GEOMEASURE_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in environ
        }
        return cls.model_validate(values)
