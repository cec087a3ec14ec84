from pathlib import Path

import pytest

from swiftype_enterprise.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT,
    ENV_ACCESS_TOKEN,
    ENV_ENDPOINT,
    ENV_OPEN_TIMEOUT,
    ENV_OVERALL_TIMEOUT,
    Configuration,
    load_configuration,
)
from swiftype_enterprise.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (ENV_ACCESS_TOKEN, ENV_ENDPOINT, ENV_OPEN_TIMEOUT, ENV_OVERALL_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = Configuration()
    assert cfg.access_token is None
    assert cfg.endpoint == DEFAULT_ENDPOINT
    assert cfg.open_timeout == DEFAULT_TIMEOUT == 15
    assert cfg.overall_timeout == 15


def test_with_overrides_ignores_none():
    cfg = Configuration(access_token="a", open_timeout=3)
    out = cfg.with_overrides(access_token=None, overall_timeout=40)
    assert out == Configuration(access_token="a", open_timeout=3, overall_timeout=40)
    assert cfg.with_overrides(access_token=None) is cfg


def test_configuration_is_immutable():
    cfg = Configuration(access_token="a")
    with pytest.raises(AttributeError):
        cfg.access_token = "b"


def test_loads_values_from_dotenv_in_parent_dir(tmp_path: Path):
    (tmp_path / ".env").write_text(
        f"{ENV_ACCESS_TOKEN}='from-file'\n"
        f"{ENV_ENDPOINT}=https://search.example.com/api/v1/\n"
        f"{ENV_OPEN_TIMEOUT}=4\n",
        encoding="utf-8",
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    cfg = load_configuration(str(nested))
    assert cfg.access_token == "from-file"
    assert cfg.endpoint == "https://search.example.com/api/v1/"
    assert cfg.open_timeout == 4.0
    assert cfg.overall_timeout == DEFAULT_TIMEOUT


def test_environment_wins_over_dotenv(tmp_path: Path, monkeypatch):
    (tmp_path / ".env").write_text(f"{ENV_ACCESS_TOKEN}=from-file\n", encoding="utf-8")
    monkeypatch.setenv(ENV_ACCESS_TOKEN, "from-env")
    assert load_configuration(str(tmp_path)).access_token == "from-env"


@pytest.mark.parametrize("raw", ["soon", "-1", "0"])
def test_bad_timeouts_fall_back_to_default(raw, tmp_path: Path, monkeypatch):
    monkeypatch.setenv(ENV_OVERALL_TIMEOUT, raw)
    assert load_configuration(str(tmp_path)).overall_timeout == DEFAULT_TIMEOUT


@pytest.mark.parametrize("field", ["open_timeout", "overall_timeout"])
@pytest.mark.parametrize("value", [0, -1.5, "15", True])
def test_rejects_non_positive_or_non_numeric_timeouts(field, value):
    with pytest.raises(ConfigurationError, match=field):
        Configuration(access_token="t", **{field: value})


def test_with_overrides_validates_timeouts():
    with pytest.raises(ConfigurationError):
        Configuration(access_token="t").with_overrides(overall_timeout=0)
