# Tests for app.json handling and environment overrides.

import json

import pytest

from file_browser.core import config


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "conf" / "app.json"
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))
    config.get_settings.cache_clear()
    yield path
    config.get_settings.cache_clear()


def test_missing_config_is_created_with_secret(config_path):
    app_config = config.get_app_config()
    assert config_path.exists()
    stored = json.loads(config_path.read_text())
    assert stored["app_settings"]["session_secret"] == app_config.session_secret
    assert app_config.session_secret


def test_secret_is_stable_across_loads(config_path):
    assert config.get_app_config().session_secret == config.get_app_config().session_secret


def test_settings_read_from_file(config_path, tmp_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        json.dumps(
            {
                "app_settings": {
                    "port": 6000,
                    "root_directory": str(tmp_path),
                    "session_secret": "s3cret",
                    "confine_to_root": True,
                }
            }
        )
    )
    settings = config.get_settings()
    assert settings.port == 6000
    assert settings.root == tmp_path
    assert settings.session_secret == "s3cret"
    assert settings.confine_to_root is True


def test_environment_overrides_file(config_path, monkeypatch):
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({"app_settings": {"port": 6000, "session_secret": "x"}}))
    monkeypatch.setenv("FILE_BROWSER_PORT", "7000")
    assert config.get_settings().port == 7000


def test_invalid_json(config_path):
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{not json")
    with pytest.raises(ValueError):
        config.get_app_config()
