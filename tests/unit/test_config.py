"""Tests for configuration loading and validation."""

from __future__ import annotations

import pytest

from finroute.config.loader import _deep_merge, config_layers, load_config
from finroute.config.schema import (
    ApiConfig,
    FinrouteConfig,
    RouterConfig,
    SearchConfig,
)
from finroute.core.errors import ConfigError

# ─── Schema Defaults ──────────────────────────────────────────


class TestSchemaDefaults:
    def test_all_defaults(self):
        cfg = FinrouteConfig()
        assert cfg.providers["anthropic"].api_key_env == "ANTHROPIC_API_KEY"
        assert cfg.providers["openai"].api_key_env == "OPENAI_API_KEY"
        assert cfg.router.model_ref == "anthropic:claude-sonnet-4-6"
        assert cfg.api.api_key_env == "FMP_API_KEY"
        assert cfg.search.collision_policy == "accumulate"
        assert cfg.logging.level == "INFO"

    def test_router_defaults(self):
        cfg = RouterConfig()
        assert cfg.temperature == 0.0
        assert cfg.max_tokens == 2048

    def test_api_defaults(self):
        cfg = ApiConfig()
        assert cfg.base_url == "https://financialmodelingprep.com/stable"
        assert cfg.api_key is None
        assert cfg.timeout == 30.0

    def test_invalid_collision_policy(self):
        with pytest.raises(ValueError):
            SearchConfig(collision_policy="merge")  # type: ignore[arg-type]


# ─── Merge ────────────────────────────────────────────────────


class TestDeepMerge:
    def test_nested_override(self):
        base = {"api": {"timeout": 30.0, "base_url": "a"}}
        override = {"api": {"timeout": 5.0}}
        assert _deep_merge(base, override) == {"api": {"timeout": 5.0, "base_url": "a"}}

    def test_scalar_replaces_dict(self):
        assert _deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}

    def test_base_not_mutated(self):
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


# ─── Loading ──────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_without_files(self):
        cfg = load_config()
        assert cfg == load_config()
        assert cfg.api.api_key is None

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[router]\nmodel_ref = "openai:gpt-5.2"\n')
        cfg = load_config(path=path)
        assert cfg.router.model_ref == "openai:gpt-5.2"

    def test_project_file_discovered(self, tmp_path):
        project = tmp_path / "finroute.toml"
        project.write_text('[search]\ncollision_policy = "overwrite"\n')
        cfg = load_config()
        assert cfg.search.collision_policy == "overwrite"

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.toml"
        path.write_text("[api]\ntimeout = 3.0\n")
        monkeypatch.setenv("FINROUTE_CONFIG", str(path))
        assert load_config().api.timeout == 3.0

    def test_env_config_missing_file(self, monkeypatch):
        monkeypatch.setenv("FINROUTE_CONFIG", "/nonexistent/finroute.toml")
        with pytest.raises(ConfigError, match="non-existent"):
            load_config()

    def test_missing_explicit_path(self):
        with pytest.raises(ConfigError, match="not found"):
            load_config(path="/nonexistent/config.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[router\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path=path)

    def test_validation_failure(self):
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(overrides={"api": {"timeout": "soon"}})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError, match="validation failed"):
            load_config(overrides={"logging": {"level": "loud"}})

    def test_log_level_case_insensitive(self):
        cfg = load_config(overrides={"logging": {"level": "warning"}})
        assert cfg.logging.level == "WARNING"

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text("[api]\ntimeout = 3.0\n")
        cfg = load_config(path=path, overrides={"api": {"timeout": 9.0}})
        assert cfg.api.timeout == 9.0


class TestConfigLayers:
    def test_no_files(self):
        assert config_layers() == []

    def test_merge_order(self, tmp_path, monkeypatch):
        user = tmp_path / "finroute" / "config.toml"
        user.parent.mkdir()
        user.write_text("")
        project = tmp_path / "finroute.toml"
        project.write_text("")
        env = tmp_path / "env.toml"
        env.write_text("")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("")
        monkeypatch.setenv("FINROUTE_CONFIG", str(env))

        layers = config_layers(explicit)
        assert [p.name for p in layers] == [
            "config.toml",
            "finroute.toml",
            "env.toml",
            "explicit.toml",
        ]

    def test_project_file_overrides_user_file(self, tmp_path):
        user = tmp_path / "finroute" / "config.toml"
        user.parent.mkdir()
        user.write_text("[api]\ntimeout = 1.0\n[logging]\nlevel = \"DEBUG\"\n")
        (tmp_path / "finroute.toml").write_text("[api]\ntimeout = 2.0\n")
        cfg = load_config()
        assert cfg.api.timeout == 2.0
        assert cfg.logging.level == "DEBUG"


class TestApiKeyResolution:
    def test_provider_key_from_env(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
        cfg = load_config()
        assert cfg.providers["anthropic"].api_key == "sk-ant"
        assert cfg.providers["openai"].api_key is None

    def test_fmp_key_from_env(self, monkeypatch):
        monkeypatch.setenv("FMP_API_KEY", "fmp-key")
        assert load_config().api.api_key == "fmp-key"

    def test_explicit_key_not_overridden(self, monkeypatch):
        monkeypatch.setenv("FMP_API_KEY", "from-env")
        cfg = load_config(overrides={"api": {"api_key": "from-file"}})
        assert cfg.api.api_key == "from-file"
