"""Tests for measurement settings."""

import pytest
from pydantic import ValidationError

from geomeasure.config import MeasureSettings


class TestMeasureSettings:
    def test_defaults(self):
        settings = MeasureSettings()
        assert settings.envelope_pruning is True
        assert settings.cache_envelopes is True
        assert settings.cache_limit == 4096

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            MeasureSettings(tolerance=0.1)

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            MeasureSettings(cache_limit=-1)

    def test_from_env(self):
        settings = MeasureSettings.from_env(
            {"GEOMEASURE_ENVELOPE_PRUNING": "false", "GEOMEASURE_CACHE_LIMIT": "10", "OTHER": "x"}
        )
        assert settings.envelope_pruning is False
        assert settings.cache_envelopes is True
        assert settings.cache_limit == 10

    def test_from_empty_env(self):
        assert MeasureSettings.from_env({}) == MeasureSettings()

    def test_bad_env_value(self):
        with pytest.raises(ValidationError):
            MeasureSettings.from_env({"GEOMEASURE_CACHE_ENVELOPES": "maybe"})
