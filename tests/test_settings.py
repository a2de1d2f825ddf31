"""
Tests for delivery settings loaded from the environment.
"""

import pytest

from imgcdn.io.settings import DeliverySettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CDN_BASE_URL",
        "DEFAULT_FORMAT",
        "PASSTHROUGH_FORMATS",
        "EXTRA_PARAMS",
        "API_URL",
        "API_KEY",
    ):
        monkeypatch.delenv(f"IMGCDN_{name}", raising=False)


def test_defaults():
    settings = DeliverySettings(_env_file=None)
    assert settings.CDN_BASE_URL == "https://cdn.bfldr.com"
    assert settings.DEFAULT_FORMAT == "jpg"
    assert settings.PASSTHROUGH_FORMATS == ["gif", "svg"]
    assert settings.EXTRA_PARAMS == {}
    assert settings.API_KEY is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("IMGCDN_CDN_BASE_URL", "https://images.example.com/")
    monkeypatch.setenv("IMGCDN_DEFAULT_FORMAT", ".WEBP")
    monkeypatch.setenv("IMGCDN_PASSTHROUGH_FORMATS", '["gif", " .SVG", ""]')
    monkeypatch.setenv("IMGCDN_EXTRA_PARAMS", '{"quality": "85"}')
    monkeypatch.setenv("IMGCDN_API_KEY", "secret")

    settings = DeliverySettings(_env_file=None)
    assert settings.CDN_BASE_URL == "https://images.example.com"
    assert settings.DEFAULT_FORMAT == "webp"
    assert settings.PASSTHROUGH_FORMATS == ["gif", "svg"]
    assert settings.EXTRA_PARAMS == {"quality": "85"}
    assert settings.API_KEY.get_secret_value() == "secret"
    settings.validate_credentials()


def test_env_file(tmp_path):
    env_file = tmp_path / "imgcdn.env"
    env_file.write_text("IMGCDN_DEFAULT_FORMAT=png\nUNRELATED=1\n")
    settings = DeliverySettings(_env_file=env_file)
    assert settings.DEFAULT_FORMAT == "png"


def test_blank_default_format_disables_conversion():
    assert DeliverySettings(_env_file=None, DEFAULT_FORMAT="  ").DEFAULT_FORMAT is None


def test_missing_api_key():
    with pytest.raises(ValueError):
        DeliverySettings(_env_file=None).validate_credentials()


if __name__ == "__main__":
    pytest.main()
