"""Error types for model configuration lookups."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional


class LoadFailure(str, Enum):
    """Why a provider document produced no configuration."""

    CONFIG_NOT_FOUND = "config_file_not_found"
    MISSING_DEFAULT_MODEL = "missing_default_model_key"
    PARSE_FAILURE = "parse_failure"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class ModelConfigError(Exception):
    """Base error with a stable error code."""

    def __init__(self, error_code: str, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.path = path


class ConfigNotFoundError(ModelConfigError):
    """No usable configuration document exists for the provider."""

    def __init__(self, provider: str, path: Path) -> None:
        super().__init__(
            LoadFailure.CONFIG_NOT_FOUND.value,
            f"Missing configuration file: {path}. "
            "Please ensure the YAML configuration file exists and is properly formatted.",
            path=path,
        )
        self.provider = provider


class MissingDefaultModelError(ModelConfigError):
    """The provider document exists but has no ``default_model`` field."""

    def __init__(self, provider: str, path: Path) -> None:
        super().__init__(
            LoadFailure.MISSING_DEFAULT_MODEL.value,
            f"Missing 'default_model' in {path}. "
            "Please add a default_model field to the configuration.",
            path=path,
        )
        self.provider = provider
