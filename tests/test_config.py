"""
ScanGate — Settings Tests
===========================

What:  Defaults, environment loading and validation of Settings.
"""

import pytest
from pydantic import ValidationError

from scangate.config import Settings


class TestDefaults:

    def test_defaults_match_original_deployment(self, monkeypatch):
        for var in ("TABLE_NAME", "AWS_REGION", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.aws_region == "ap-south-1"
        assert settings.table_name == "my-table"
        assert settings.backend_port == 8080
        assert settings.cors_origins_list == ["*"]
        assert settings.dynamodb_endpoint_url is None
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TABLE_NAME", "orders")
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.setenv("BACKEND_PORT", "9090")

        settings = Settings(_env_file=None)

        assert settings.table_name == "orders"
        assert settings.aws_region == "eu-west-1"
        assert settings.backend_port == 9090


class TestValidation:

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_table_name_rejected(self, name):
        with pytest.raises(ValidationError):
            Settings(table_name=name, _env_file=None)

    def test_log_level_normalized(self):
        assert Settings(log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD", _env_file=None)

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            Settings(backend_port=port, _env_file=None)

    def test_blank_endpoint_means_aws(self):
        assert Settings(dynamodb_endpoint_url="", _env_file=None).dynamodb_endpoint_url is None

    def test_cors_origin_list(self):
        settings = Settings(cors_origins="https://a.example, https://b.example", _env_file=None)
        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]

    def test_frozen(self, test_settings):
        with pytest.raises(ValidationError):
            test_settings.table_name = "other"
