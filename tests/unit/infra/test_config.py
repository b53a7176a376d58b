"""
Settings and logging setup
"""

import pytest
from pydantic import ValidationError

from viewmodel_export.config import Settings
from viewmodel_export.infra.logging import get_logger, setup_logging


class TestSettings:
    """pydantic-settings configuration"""

    def test_defaults(self, settings):
        assert settings.output_basename == "SharedModels"
        assert settings.interface_prefix == "I"
        assert settings.indent == "    "
        assert settings.strict_references is False
        assert settings.type_overrides == {}

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("VIEWMODEL_EXPORT_STRICT_REFERENCES", "true")
        monkeypatch.setenv("VIEWMODEL_EXPORT_TYPE_OVERRIDES", '{"DateTime": "string"}')
        monkeypatch.setenv("VIEWMODEL_EXPORT_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.strict_references is True
        assert settings.type_overrides == {"DateTime": "string"}
        assert settings.log_level == "DEBUG"

    def test_empty_basename_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, output_basename="  ")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")


class TestLogging:
    """structlog setup"""

    @pytest.mark.parametrize("format", ["console", "json"])
    def test_setup_and_log(self, format):
        setup_logging(level="DEBUG", format=format)

        get_logger("tests").info("test_event", value=1)
