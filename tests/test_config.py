"""Tests for GHIS configuration loading."""

import pytest
from pydantic import ValidationError

from ghis.config import Config, get_config, reload_config


class TestDefaults:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("GHIS_EFFECT_STRICTNESS", raising=False)
        monkeypatch.delenv("GHIS_CACHE_ENABLED", raising=False)
        config = Config(_env_file=None)
        assert config.effect_strictness == "standard"
        assert config.cache_enabled is True
        assert config.cache_max_entries == 256
        assert config.log_file is None

    def test_get_config_is_cached(self):
        assert get_config() is get_config()


class TestEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("GHIS_EFFECT_STRICTNESS", "conservative")
        monkeypatch.setenv("GHIS_CACHE_MAX_ENTRIES", "8")
        config = reload_config()
        assert config.effect_strictness == "conservative"
        assert config.cache_max_entries == 8

    def test_invalid_strictness_rejected(self, monkeypatch):
        monkeypatch.setenv("GHIS_EFFECT_STRICTNESS", "reckless")
        with pytest.raises(ValidationError):
            Config(_env_file=None)

    def test_cache_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(_env_file=None, cache_max_entries=0)


class TestYaml:
    def test_missing_yaml_falls_back_to_defaults(self, tmp_path):
        config = Config.from_yaml(tmp_path / "absent.yaml")
        assert isinstance(config, Config)

    def test_yaml_values_loaded(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("effect_strictness: aggressive\ncache_enabled: false\n")
        config = reload_config(path)
        assert config.effect_strictness == "aggressive"
        assert config.cache_enabled is False
        assert get_config() is config

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Config.from_yaml(path).effect_strictness in ("conservative", "standard", "aggressive")


def test_only_engine_fields_exposed():
    assert set(Config.model_fields) == {
        "effect_strictness",
        "cache_enabled",
        "cache_max_entries",
        "log_level",
        "log_file",
    }
