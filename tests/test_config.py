import dataclasses

import pytest

from miniflux_export.config import DEFAULT_HOST, ExportConfig


def test_export_config_is_immutable():
    config = ExportConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.host = "http://other"


@pytest.mark.parametrize(
    "host", [DEFAULT_HOST, "https://reader.example.com/", "http://10.0.0.2:8080/v1"]
)
def test_validate_accepts_http_urls(host):
    ExportConfig(host=host).validate()


@pytest.mark.parametrize("host", ["", "localhost:8080", "ftp://example.com", "http://"])
def test_validate_rejects_invalid_hosts(host):
    with pytest.raises(ValueError, match="Invalid Miniflux host"):
        ExportConfig(host=host).validate()


def test_effective_log_level_in_silent_mode():
    assert ExportConfig(log_level="DEBUG").effective_log_level == "DEBUG"
    assert ExportConfig(log_level="DEBUG", silent=True).effective_log_level == "ERROR"
