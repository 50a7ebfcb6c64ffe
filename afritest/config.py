"""Configuration loading for afritest (.afritest.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".afritest.yml"

FAILURE_POLICIES = ("write", "skip", "scaffold")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Generation backend settings from .afritest.yml."""

    provider: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class ScanConfig:
    """File discovery rules."""

    extensions: List[str] = field(default_factory=lambda: [".ts", ".js"])
    exclude_dirs: List[str] = field(default_factory=lambda: ["node_modules", ".git"])
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class GenerationConfig:
    """Output layout and orchestration policy."""

    output_dir: str = "test"
    unit_dir: str = "unit"
    integration_dir: str = "integration"
    concurrency: int = 1
    on_failure: str = "write"
    import_root: Optional[Path] = None
    test_suffix: str = ".ai.spec.ts"
    templates_dir: Optional[Path] = None


@dataclass
class AfritestConfig:
    """Represents the high-level settings defined in .afritest.yml."""

    root: Path
    llm: Optional[LLMConfig] = None
    scan: ScanConfig = field(default_factory=ScanConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)


@dataclass(frozen=True)
class LLMSettings:
    """Fully resolved backend settings handed to the generation client."""

    provider: str = "gemini"
    model: str = "gemini-1.5-flash-latest"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    api_key: Optional[str] = None
    temperature: Optional[float] = 0.2
    max_tokens: Optional[int] = None
    request_timeout: float = 60.0


_DEFAULT_BASE_URLS = {
    "gemini": "https://generativelanguage.googleapis.com/v1beta",
    "openai": "https://api.openai.com/v1",
}

_DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash-latest",
    "openai": "gpt-4o-mini",
}

ENV_PROVIDER_KEYS = ("AFRITEST_LLM_PROVIDER",)
ENV_MODEL_KEYS = ("AFRITEST_LLM_MODEL",)
ENV_BASE_URL_KEYS = ("AFRITEST_LLM_BASE_URL",)
ENV_API_KEY_KEYS = {
    "gemini": ("AFRITEST_LLM_API_KEY", "GEMINI_API_KEY"),
    "openai": ("AFRITEST_LLM_API_KEY", "OPENAI_API_KEY"),
}


def load_config(config_path: Path) -> AfritestConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AfritestConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = None
    if llm_data:
        llm = LLMConfig(
            provider=_as_str(llm_data.get("provider")),
            model=_as_str(llm_data.get("model")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            temperature=_as_float(llm_data.get("temperature")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        extensions = _as_str_list(scan_data.get("extensions"))
        if extensions:
            scan.extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]
        if "exclude_dirs" in scan_data:
            scan.exclude_dirs = _as_str_list(scan_data.get("exclude_dirs"))
        scan.exclude_paths = _as_str_list(scan_data.get("exclude_paths"))

    generation = GenerationConfig()
    generation_data = _as_dict(data.get("generation"))
    if generation_data:
        generation.output_dir = _as_str(generation_data.get("output_dir")) or generation.output_dir
        generation.unit_dir = _as_str(generation_data.get("unit_dir")) or generation.unit_dir
        generation.integration_dir = (
            _as_str(generation_data.get("integration_dir")) or generation.integration_dir
        )
        concurrency = _as_int(generation_data.get("concurrency"))
        if concurrency is not None:
            if concurrency < 1:
                raise ConfigError("generation.concurrency must be a positive integer")
            generation.concurrency = concurrency
        on_failure = _as_str(generation_data.get("on_failure"))
        if on_failure is not None:
            on_failure = on_failure.strip().lower()
            if on_failure not in FAILURE_POLICIES:
                allowed = ", ".join(FAILURE_POLICIES)
                raise ConfigError(f"generation.on_failure must be one of: {allowed}")
            generation.on_failure = on_failure
        import_root = _as_str(generation_data.get("import_root"))
        if import_root:
            generation.import_root = (root / import_root).resolve()
        generation.test_suffix = _as_str(generation_data.get("test_suffix")) or generation.test_suffix
        templates_dir = _as_str(generation_data.get("templates_dir"))
        if templates_dir:
            generation.templates_dir = root / templates_dir

    return AfritestConfig(root=root, llm=llm, scan=scan, generation=generation)


def resolve_llm_settings(
    config: AfritestConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> LLMSettings:
    """Merge environment overrides, file settings and defaults into one object."""
    env = os.environ if environ is None else environ
    llm_cfg = config.llm if config is not None and config.llm is not None else LLMConfig()

    provider = (_first_env_value(env, ENV_PROVIDER_KEYS) or llm_cfg.provider or "gemini").lower()
    if provider not in _DEFAULT_BASE_URLS:
        raise ConfigError(f"Unsupported LLM provider: {provider}")

    model = _first_env_value(env, ENV_MODEL_KEYS) or llm_cfg.model or _DEFAULT_MODELS[provider]
    base_url = (
        _first_env_value(env, ENV_BASE_URL_KEYS) or llm_cfg.base_url or _DEFAULT_BASE_URLS[provider]
    )
    api_key = _first_env_value(env, ENV_API_KEY_KEYS[provider]) or llm_cfg.api_key

    defaults = LLMSettings()
    return LLMSettings(
        provider=provider,
        model=model,
        base_url=base_url.rstrip("/"),
        api_key=api_key,
        temperature=llm_cfg.temperature if llm_cfg.temperature is not None else defaults.temperature,
        max_tokens=llm_cfg.max_tokens,
        request_timeout=llm_cfg.request_timeout or defaults.request_timeout,
    )


def _first_env_value(env: Mapping[str, str], keys: Sequence[str]) -> str | None:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
