import json

import pytest

from weathermail.config import load_settings
from weathermail.errors import ConfigurationError

ENV_KEYS = [
    "PIRATEWEATHER_API_KEY",
    "UNITS",
    "LOCATIONS",
    "PIRATEWEATHER_URL",
    "TZ",
    "OUT_DIR",
    "LOGS_DIR",
    "LOG_LEVEL",
    "CACHE_TTL_MINUTES",
    "HTTP_TIMEOUT",
    "HTML_ONLY",
    "MAIL_FROM",
    "MAIL_TO",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
]

LOCATIONS = json.dumps([{"name": "NYC", "lat": "40.7128", "lon": "-74.006"}])


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_load_settings_from_env(clean_env, monkeypatch):
    monkeypatch.setenv("PIRATEWEATHER_API_KEY", "secret")
    monkeypatch.setenv("UNITS", "SI")
    monkeypatch.setenv("LOCATIONS", LOCATIONS)
    monkeypatch.setenv("CACHE_TTL_MINUTES", "15")
    settings = load_settings()
    assert settings.api_key == "secret"
    assert settings.units == "si"
    assert settings.locations[0].name == "NYC"
    assert settings.locations[0].lat == 40.7128
    assert settings.cache_ttl_minutes == 15
    assert settings.tz == "America/New_York"
    assert settings.email.enabled is False
    assert (clean_env / "out").is_dir()
    assert (clean_env / "logs").is_dir()


def test_cli_args_override_env(clean_env, monkeypatch):
    monkeypatch.setenv("PIRATEWEATHER_API_KEY", "from-env")
    monkeypatch.setenv("LOCATIONS", LOCATIONS)
    settings = load_settings(
        {"api_key": "from-cli", "units": "ca", "out_dir": str(clean_env / "artifacts"), "html_only": True}
    )
    assert settings.api_key == "from-cli"
    assert settings.units == "ca"
    assert settings.out_dir == clean_env / "artifacts"
    assert settings.html_only is True


def test_units_default_to_us(clean_env):
    settings = load_settings({"api_key": "k", "locations": LOCATIONS})
    assert settings.units == "us"


def test_email_enabled_when_complete(clean_env, monkeypatch):
    for key, value in {
        "MAIL_FROM": "bot@example.com",
        "MAIL_TO": "me@example.com",
        "SMTP_HOST": "smtp.example.com",
        "SMTP_PORT": "2525",
        "SMTP_USER": "bot",
        "SMTP_PASS": "pw",
    }.items():
        monkeypatch.setenv(key, value)
    settings = load_settings({"api_key": "k", "locations": LOCATIONS})
    assert settings.email.enabled
    assert settings.email.port == 2525


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_key": "", "locations": LOCATIONS},
        {"api_key": "k", "locations": LOCATIONS, "units": "metric"},
        {"api_key": "k", "locations": LOCATIONS, "tz": "Mars/Olympus_Mons"},
        {"api_key": "k", "locations": "[]"},
        {"api_key": "k"},
    ],
)
def test_invalid_configuration(clean_env, overrides):
    with pytest.raises(ConfigurationError):
        load_settings(overrides)


def test_non_numeric_smtp_port_is_a_configuration_error(clean_env, monkeypatch):
    monkeypatch.setenv("SMTP_PORT", "submission")
    with pytest.raises(ConfigurationError):
        load_settings({"api_key": "k", "locations": LOCATIONS})


def test_malformed_locations_json_propagates(clean_env):
    with pytest.raises(json.JSONDecodeError):
        load_settings({"api_key": "k", "locations": "[{"})
