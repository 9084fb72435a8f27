"""Pytest configuration and fixtures for all tests."""

from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml

from llm_model_config.core import model_config as model_config_module
from llm_model_config.core.directory import DirectoryResolver
from llm_model_config.core.model_config import ModelConfigManager


@pytest.fixture
def models_dir(tmp_path: Path) -> Path:
    """Empty directory that tests fill with provider documents."""
    directory = tmp_path / "config" / "models"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_provider_doc(models_dir: Path) -> Callable[..., Path]:
    """Write ``<provider>.yml`` into ``models_dir`` from a dict or raw text."""

    def _write(provider: str, document: Any, suffix: str = ".yml") -> Path:
        path = models_dir / f"{provider}{suffix}"
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_resolver(tmp_path: Path) -> Callable[..., DirectoryResolver]:
    """Build resolvers whose discovery never escapes ``tmp_path``."""

    def _build(configured: Any = None, **overrides: Any) -> DirectoryResolver:
        options: Dict[str, Any] = {
            "cwd_provider": lambda: tmp_path / "workdir",
            "package_relative_dir": tmp_path / "site-packages" / "config" / "models",
            "bundled_dir": tmp_path / "bundled",
        }
        options.update(overrides)
        return DirectoryResolver(configured, **options)

    return _build


@pytest.fixture
def manager(models_dir: Path, isolated_resolver: Callable[..., DirectoryResolver]) -> ModelConfigManager:
    """Manager reading only from ``models_dir``."""
    return ModelConfigManager(resolver=isolated_resolver(models_dir))


@pytest.fixture
def global_manager(models_dir: Path, isolated_resolver, monkeypatch) -> ModelConfigManager:
    """Swap the process-wide manager for an isolated one for the test's duration."""
    isolated = ModelConfigManager(resolver=isolated_resolver(models_dir))
    monkeypatch.setattr(model_config_module, "model_config_manager", isolated)
    return isolated


@pytest.fixture
def anthropic_doc() -> Dict[str, Any]:
    return {
        "provider": "anthropic",
        "default_model": "claude-sonnet-4-20250514",
        "models": {
            "claude-3-5-sonnet-20241022": {
                "context_window": 200000,
                "max_output_tokens": 8192,
                "pricing": {"input": 3.0, "output": 15.0},
                "capabilities": ["streaming", "function_calling", "vision"],
            },
            "claude-3-5-haiku-20241022": {
                "context_window": 200000,
                "capabilities": ["streaming"],
            },
        },
    }
