"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from afritest.config import (
    CONFIG_FILENAME,
    ConfigError,
    LLMSettings,
    load_config,
    resolve_llm_settings,
)


def _write_config(root: Path, text: str) -> Path:
    path = root / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_config_returns_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.root == tmp_path.resolve()
    assert config.llm is None
    assert config.scan.extensions == [".ts", ".js"]
    assert config.scan.exclude_dirs == ["node_modules", ".git"]
    assert config.generation.output_dir == "test"
    assert config.generation.concurrency == 1
    assert config.generation.on_failure == "write"
    assert config.generation.test_suffix == ".ai.spec.ts"


def test_load_config_parses_all_sections(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
llm:
  provider: openai
  model: gpt-4o
  temperature: 0.5
  max_tokens: 512
  request_timeout: 15
scan:
  extensions: [ts, .tsx]
  exclude_dirs: [vendor]
  exclude_paths: [dist/]
generation:
  output_dir: generated
  concurrency: 4
  on_failure: Scaffold
  import_root: src
  templates_dir: prompts
""",
    )

    config = load_config(tmp_path)

    assert config.llm is not None
    assert config.llm.provider == "openai"
    assert config.llm.model == "gpt-4o"
    assert config.llm.temperature == 0.5
    assert config.llm.max_tokens == 512
    assert config.llm.request_timeout == 15.0
    assert config.scan.extensions == [".ts", ".tsx"]
    assert config.scan.exclude_dirs == ["vendor"]
    assert config.scan.exclude_paths == ["dist/"]
    assert config.generation.output_dir == "generated"
    assert config.generation.concurrency == 4
    assert config.generation.on_failure == "scaffold"
    assert config.generation.import_root == (tmp_path / "src").resolve()
    assert config.generation.templates_dir == tmp_path.resolve() / "prompts"


def test_load_config_accepts_file_path(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "generation:\n  output_dir: out\n")

    assert load_config(path).generation.output_dir == "out"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "\n")

    assert load_config(tmp_path).generation.on_failure == "write"


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "- just\n- a list\n")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "llm: [unclosed\n")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_failure_policy_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "generation:\n  on_failure: retry\n")

    with pytest.raises(ConfigError, match="on_failure"):
        load_config(tmp_path)


def test_non_positive_concurrency_is_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "generation:\n  concurrency: 0\n")

    with pytest.raises(ConfigError, match="concurrency"):
        load_config(tmp_path)


def test_resolve_llm_settings_defaults_to_gemini(tmp_path: Path) -> None:
    settings = resolve_llm_settings(load_config(tmp_path), environ={})

    assert settings == LLMSettings()


def test_resolve_llm_settings_prefers_environment(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "llm:\n  provider: gemini\n  model: file-model\n  api_key: file-key\n",
    )
    environ = {
        "AFRITEST_LLM_MODEL": "env-model",
        "GEMINI_API_KEY": "env-key",
        "AFRITEST_LLM_BASE_URL": "https://example.test/v1/",
    }

    settings = resolve_llm_settings(load_config(tmp_path), environ=environ)

    assert settings.provider == "gemini"
    assert settings.model == "env-model"
    assert settings.api_key == "env-key"
    assert settings.base_url == "https://example.test/v1"


def test_resolve_llm_settings_switches_provider_defaults() -> None:
    settings = resolve_llm_settings(None, environ={"AFRITEST_LLM_PROVIDER": "OpenAI"})

    assert settings.provider == "openai"
    assert settings.model == "gpt-4o-mini"
    assert settings.base_url == "https://api.openai.com/v1"


def test_resolve_llm_settings_rejects_unknown_provider() -> None:
    with pytest.raises(ConfigError, match="Unsupported"):
        resolve_llm_settings(None, environ={"AFRITEST_LLM_PROVIDER": "llamacpp"})


def test_resolve_llm_settings_reads_the_providers_own_key() -> None:
    environ = {"GEMINI_API_KEY": "g-key", "OPENAI_API_KEY": "sk-openai"}

    openai = resolve_llm_settings(None, environ={**environ, "AFRITEST_LLM_PROVIDER": "openai"})
    gemini = resolve_llm_settings(None, environ=environ)

    assert openai.api_key == "sk-openai"
    assert gemini.api_key == "g-key"


def test_generic_api_key_wins_for_any_provider() -> None:
    environ = {
        "AFRITEST_LLM_PROVIDER": "openai",
        "AFRITEST_LLM_API_KEY": "shared",
        "OPENAI_API_KEY": "sk-openai",
    }

    assert resolve_llm_settings(None, environ=environ).api_key == "shared"
