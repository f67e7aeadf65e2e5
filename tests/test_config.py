"""
Unit tests for application settings.
"""
from ecostats.config import Settings


# ============================================================
# Settings Tests
# ============================================================

class TestSettings:
    """Tests for settings defaults and environment overrides."""

    def test_analysis_defaults(self):
        """Analysis parameters default to the documented values."""
        config = Settings(_env_file=None)

        assert config.include_zero_counts is False
        assert config.default_curve_model == "power"
        assert config.nested_plot_sizes == [25.0, 100.0, 400.0, 1600.0]
        assert config.canopy_confidence_level == 0.95

    def test_environment_override(self, monkeypatch):
        """Environment variables override defaults, case-insensitively."""
        monkeypatch.setenv("CANOPY_CONFIDENCE_LEVEL", "0.9")
        monkeypatch.setenv("default_curve_model", "logarithmic")

        config = Settings(_env_file=None)

        assert config.canopy_confidence_level == 0.9
        assert config.default_curve_model == "logarithmic"

    def test_only_used_fields_declared(self):
        """Every declared setting is read somewhere in the application."""
        assert set(Settings.model_fields) == {
            "include_zero_counts",
            "default_curve_model",
            "nested_plot_sizes",
            "canopy_confidence_level",
            "log_level",
            "cors_origins",
            "rate_limit_requests",
            "app_name",
            "app_version",
        }
