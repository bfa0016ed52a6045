"""Tests for Settings configuration class."""

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self):
        """Settings should load with default values when no env vars are set."""
        from profile_matching.config.settings import (
            GapStrategyName,
            NormalizationMethod,
            Settings,
            WeightHandling,
        )

        settings = Settings(_env_file=None)

        assert settings.core_factor_weight == 0.6
        assert settings.secondary_factor_weight == 0.4
        assert settings.gap_strategy is GapStrategyName.STANDARD
        assert settings.normalization is NormalizationMethod.NONE
        assert settings.weight_handling is WeightHandling.DIRECT
        assert settings.score_min == 0.0
        assert settings.score_max == 5.0
        assert settings.strength_threshold == 4.0
        assert settings.log_level == "INFO"


class TestSettingsFromEnvironment:
    """Test that Settings reads from environment variables."""

    def test_settings_reads_factor_weights_from_env(self, monkeypatch):
        """Factor weights come from PROFILE_MATCHING_* variables."""
        monkeypatch.setenv("PROFILE_MATCHING_CORE_FACTOR_WEIGHT", "0.7")
        monkeypatch.setenv("PROFILE_MATCHING_SECONDARY_FACTOR_WEIGHT", "0.3")

        from profile_matching.config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.core_factor_weight == 0.7
        assert settings.secondary_factor_weight == 0.3

    def test_settings_choices_are_case_insensitive(self, monkeypatch):
        """Choice values are accepted in any case."""
        monkeypatch.setenv("PROFILE_MATCHING_GAP_STRATEGY", "SIMPLE")
        monkeypatch.setenv("PROFILE_MATCHING_NORMALIZATION", "Global")
        monkeypatch.setenv("PROFILE_MATCHING_WEIGHT_HANDLING", "NORMALIZED")

        from profile_matching.config.settings import (
            GapStrategyName,
            NormalizationMethod,
            Settings,
            WeightHandling,
        )

        settings = Settings(_env_file=None)

        assert settings.gap_strategy is GapStrategyName.SIMPLE
        assert settings.normalization is NormalizationMethod.GLOBAL
        assert settings.weight_handling is WeightHandling.NORMALIZED

    def test_settings_log_level_is_uppercased(self, monkeypatch):
        """Log level should be normalised to upper case."""
        monkeypatch.setenv("PROFILE_MATCHING_LOG_LEVEL", "debug")

        from profile_matching.config.settings import Settings

        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_settings_reads_dotenv_file(self, tmp_path):
        """Values can come from a .env file."""
        from profile_matching.config.settings import Settings

        env_file = tmp_path / ".env"
        env_file.write_text("PROFILE_MATCHING_STRENGTH_THRESHOLD=4.5\n")

        settings = Settings(_env_file=env_file)

        assert settings.strength_threshold == 4.5


class TestSettingsValidation:
    """Test that Settings rejects invalid values."""

    def test_factor_weights_must_sum_to_one(self):
        """0.6 + 0.6 is not a valid split."""
        from profile_matching.config.settings import Settings

        with pytest.raises(ValidationError, match="must sum to 1.0"):
            Settings(_env_file=None, core_factor_weight=0.6, secondary_factor_weight=0.6)

    def test_factor_weights_are_bounded(self):
        """Factor weights lie in [0, 1]."""
        from profile_matching.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, core_factor_weight=1.5, secondary_factor_weight=-0.5)

    def test_invalid_log_level_is_rejected(self):
        """Unknown log levels fail validation."""
        from profile_matching.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_gap_strategy_is_rejected(self):
        """Only continuous strategies can be selected from settings."""
        from profile_matching.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, gap_strategy="discrete")

    def test_score_range_must_be_ordered(self):
        """score_min must be below score_max."""
        from profile_matching.config.settings import Settings

        with pytest.raises(ValidationError, match="score_min"):
            Settings(_env_file=None, score_min=5.0, score_max=5.0)


class TestSettingsSingleton:
    """Test the settings singleton helpers."""

    def test_get_settings_returns_same_instance(self):
        """get_settings caches the instance."""
        from profile_matching.config.settings import get_settings

        assert get_settings() is get_settings()

    def test_reset_settings_rereads_environment(self, monkeypatch):
        """reset_settings drops the cached instance."""
        from profile_matching.config.settings import get_settings, reset_settings

        first = get_settings()
        monkeypatch.setenv("PROFILE_MATCHING_STRENGTH_THRESHOLD", "3.5")
        reset_settings()

        second = get_settings()

        assert second is not first
        assert second.strength_threshold == 3.5
