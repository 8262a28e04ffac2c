import pytest

from cfxresolver.config import DEFAULT_DIRECTORY_URL, DEFAULT_USER_AGENT, load_settings

_VARS = ("CFX_DIRECTORY_URL", "CFX_USER_AGENT", "CFX_LOOKUP_TIMEOUT", "CFX_PROBE_TIMEOUT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_applies_defaults() -> None:
    settings = load_settings()

    assert settings.directory_url == DEFAULT_DIRECTORY_URL
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.lookup_timeout == 10.0
    assert settings.probe_timeout == 5.0
    assert settings.log_level == "INFO"


def test_load_settings_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("CFX_DIRECTORY_URL", "http://mirror.local/")
    monkeypatch.setenv("CFX_USER_AGENT", "probe/2")
    monkeypatch.setenv("CFX_LOOKUP_TIMEOUT", "3")
    monkeypatch.setenv("CFX_PROBE_TIMEOUT", "1.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.directory_url == "http://mirror.local"
    assert settings.user_agent == "probe/2"
    assert settings.lookup_timeout == 3.0
    assert settings.probe_timeout == 1.5
    assert settings.log_level == "DEBUG"


def test_non_positive_lookup_timeout_disables_bound(monkeypatch) -> None:
    monkeypatch.setenv("CFX_LOOKUP_TIMEOUT", "0")

    assert load_settings().lookup_timeout is None


@pytest.mark.parametrize("name, value", [("CFX_PROBE_TIMEOUT", "soon"), ("CFX_PROBE_TIMEOUT", "0"), ("CFX_LOOKUP_TIMEOUT", "x")])
def test_invalid_timeouts_raise(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        load_settings()
