import pytest

from atomplatform.config import (
    CONFIG_ENV_VAR,
    ETSY_API_BASE,
    EndpointConfig,
    EtsySettings,
    MissingCredentialError,
    PrintfulSettings,
)


def test_etsy_settings_from_env(monkeypatch):
    monkeypatch.setenv("ETSY_API_KEY", "key")
    monkeypatch.setenv("ETSY_ACCESS_TOKEN", "tok")
    monkeypatch.delenv("ETSY_REFRESH_TOKEN", raising=False)

    settings = EtsySettings.from_env()

    assert settings.api_key == "key"
    assert settings.access_token == "tok"
    assert settings.refresh_token is None


def test_etsy_settings_missing_key(monkeypatch):
    monkeypatch.delenv("ETSY_API_KEY", raising=False)

    with pytest.raises(MissingCredentialError, match="ETSY_API_KEY"):
        EtsySettings.from_env()


def test_printful_settings_missing_key(monkeypatch):
    monkeypatch.delenv("PRINTFUL_API_KEY", raising=False)

    with pytest.raises(MissingCredentialError, match="PRINTFUL_API_KEY"):
        PrintfulSettings.from_env()


def test_missing_credential_is_runtime_error():
    assert issubclass(MissingCredentialError, RuntimeError)


def test_endpoint_defaults():
    config = EndpointConfig()

    assert config.etsy_api_base == ETSY_API_BASE
    assert config.printful_api_base == "https://api.printful.com"


def test_endpoint_load_partial_override(tmp_path):
    path = tmp_path / "endpoints.yaml"
    path.write_text("etsy:\n  api_base: http://localhost:9000/v3\n", encoding="utf-8")

    config = EndpointConfig.load(path)

    assert config.etsy_api_base == "http://localhost:9000/v3"
    assert config.etsy_oauth_base == "https://api.etsy.com/v3/public/oauth"
    assert config.printful_api_base == "https://api.printful.com"


def test_endpoint_load_empty_file(tmp_path):
    path = tmp_path / "endpoints.yaml"
    path.write_text("", encoding="utf-8")

    assert EndpointConfig.load(path) == EndpointConfig()


def test_endpoint_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        EndpointConfig.load(tmp_path / "nope.yaml")


def test_endpoint_load_bad_section(tmp_path):
    path = tmp_path / "endpoints.yaml"
    path.write_text("printful: just-a-string\n", encoding="utf-8")

    with pytest.raises(ValueError, match="printful"):
        EndpointConfig.load(path)


def test_endpoint_resolve_from_env(tmp_path, monkeypatch):
    path = tmp_path / "endpoints.yaml"
    path.write_text("printful:\n  api_base: http://mock\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert EndpointConfig.resolve().printful_api_base == "http://mock"


def test_endpoint_resolve_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    assert EndpointConfig.resolve() == EndpointConfig()
