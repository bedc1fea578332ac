import pytest
import yaml

from travel_autotest.ui_testing.framework.config_manager import (
    CONFIG_PATH_ENV,
    ConfigManager,
    ConfigurationError,
    Timeouts,
    get_config,
    reset_config,
)


def _write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path, {"browser": {"name": "Firefox", "headless": True}})

    config = ConfigManager(config_path=config_path)
    assert config.browser == "firefox"
    assert config.headless is True
    assert config.browser_size == "1920x1080"
    assert config.element_timeout == 10000
    assert config.get("urls.missing", "fallback") == "fallback"

    monkeypatch.setenv("BROWSER_NAME", "webkit")
    monkeypatch.setenv("TIMEOUTS_ELEMENT", "2500")
    assert config.browser == "webkit"
    assert config.element_timeout == 2500


def test_typed_getters_tolerate_bad_values(monkeypatch, tmp_path):
    config_path = _write_config(tmp_path, {"timeouts": {"page_load": "slow"}})
    config = ConfigManager(config_path=config_path)

    assert config.page_load_timeout == 20000

    for raw, expected in [("yes", True), ("ON", True), ("1", True), ("false", False), ("nope", False)]:
        monkeypatch.setenv("BROWSER_HEADLESS", raw)
        assert config.headless is expected


def test_timeouts_built_from_config(tmp_path):
    config_path = _write_config(
        tmp_path, {"timeouts": {"page_load": 30000, "element": 8000, "default": 4000}}
    )
    timeouts = ConfigManager(config_path=config_path).timeouts()

    assert timeouts == Timeouts(element_ms=8000, page_load_ms=30000, default_ms=4000)
    assert timeouts.poll_interval_ms == 100


def test_get_section_returns_copy(tmp_path):
    config_path = _write_config(tmp_path, {"logging": {"level": "DEBUG"}, "urls": "not-a-mapping"})
    config = ConfigManager(config_path=config_path)

    section = config.get_section("logging")
    section["level"] = "ERROR"
    assert config.get_section("logging") == {"level": "DEBUG"}
    assert config.get_section("urls") == {}
    assert config.get_section("absent") == {}


def test_missing_and_invalid_files_are_fatal(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigManager(config_path=tmp_path / "missing.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("browser: [unclosed", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigManager(config_path=broken)

    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just a string", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="mapping"):
        ConfigManager(config_path=scalar)


def test_get_config_is_shared_until_reset(monkeypatch, tmp_path):
    first = _write_config(tmp_path, {"urls": {"agoda": "https://first.example/"}})
    monkeypatch.setenv(CONFIG_PATH_ENV, str(first))

    config = get_config()
    assert get_config() is config
    assert config.agoda_url == "https://first.example/"

    second = tmp_path / "second.yaml"
    second.write_text(yaml.dump({"urls": {"agoda": "https://second.example/"}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_PATH_ENV, str(second))
    assert get_config().agoda_url == "https://first.example/"

    reset_config()
    assert get_config().agoda_url == "https://second.example/"


def test_repository_config_file_loads():
    config = ConfigManager()
    assert config.path.name == "config.yaml"
    assert config.agoda_url.startswith("https://www.agoda.com")
    assert config.vietjet_url.startswith("https://www.vietjetair.com")
