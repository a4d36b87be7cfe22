import os

import pytest

from imageconverter.config import Config, get_config


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run in an empty directory with PORT and MAXIMAGESIZE unset and restored afterwards."""
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "MAXIMAGESIZE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


def test_defaults_without_env(clean_env):
    assert get_config() == Config(port="8080", max_image_size="10")


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("MAXIMAGESIZE", "25")
    config = get_config()
    assert config.port == "9000"
    assert config.max_image_size == "25"


def test_empty_values_fall_back_to_defaults(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "")
    monkeypatch.setenv("MAXIMAGESIZE", "")
    assert get_config() == Config()


def test_loads_dotenv_file(clean_env):
    (clean_env / ".env").write_text("PORT=7070\nMAXIMAGESIZE=3\n")
    config = get_config()
    assert config.port == "7070"
    assert config.max_image_size == "3"
    assert os.environ["PORT"] == "7070"


def test_environment_overrides_dotenv(clean_env, monkeypatch):
    (clean_env / ".env").write_text("PORT=7070\n")
    monkeypatch.setenv("PORT", "6060")
    config = get_config()
    assert config.port == "6060"
    assert config.max_image_size == "10"