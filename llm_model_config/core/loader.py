"""Read and normalize one provider's YAML configuration document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from llm_model_config.core.errors import LoadFailure
from llm_model_config.core.keys import normalize_document
from llm_model_config.core.providers import Provider
from llm_model_config.core.schema import ProviderConfig
from llm_model_config.utils.log import get_logger

logger = get_logger()

DOCUMENT_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class ProviderLoadResult:
    """Outcome of loading one provider document.

    ``config`` is None when no usable document exists; ``failure`` then says
    why. ``path`` is the document that was read, or the expected location
    when nothing was found.
    """

    provider: Provider
    path: Path
    config: Optional[ProviderConfig] = None
    failure: Optional[LoadFailure] = None
    detail: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.config is not None


def document_path(provider: Provider, directory: Path) -> Path:
    """Expected location of ``provider``'s document inside ``directory``."""
    return directory / f"{provider.value}{DOCUMENT_SUFFIXES[0]}"


def load_provider_document(provider: Provider, directory: Path) -> ProviderLoadResult:
    """Load ``provider``'s document from ``directory``.

    Never raises for storage or parse problems: those are logged and reported
    as a result without a config so other providers keep working.
    """
    for suffix in DOCUMENT_SUFFIXES:
        path = directory / f"{provider.value}{suffix}"
        try:
            exists = path.is_file()
        except OSError as exc:
            logger.warning(
                "[model_config] Cannot check model config for %s: %s: %s",
                provider.value,
                type(exc).__name__,
                exc,
                extra={"path": str(path)},
            )
            return ProviderLoadResult(
                provider=provider,
                path=path,
                failure=LoadFailure.STORAGE_UNAVAILABLE,
                detail=str(exc),
            )
        if exists:
            return _read_document(provider, path)

    expected = document_path(provider, directory)
    logger.debug(
        "[model_config] Model config file not found",
        extra={"provider": provider.value, "path": str(expected)},
    )
    return ProviderLoadResult(
        provider=provider,
        path=expected,
        failure=LoadFailure.CONFIG_NOT_FOUND,
    )


def _parse_failure(provider: Provider, path: Path, reason: str) -> ProviderLoadResult:
    logger.warning(
        "[model_config] Failed to load model config for %s: %s",
        provider.value,
        reason,
        extra={"path": str(path)},
    )
    return ProviderLoadResult(
        provider=provider,
        path=path,
        failure=LoadFailure.PARSE_FAILURE,
        detail=reason,
    )


def _read_document(provider: Provider, path: Path) -> ProviderLoadResult:
    logger.debug(
        "[model_config] Loading model config",
        extra={"provider": provider.value, "path": str(path)},
    )
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw: Any = yaml.safe_load(handle)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        return _parse_failure(provider, path, f"{type(exc).__name__}: {exc}")

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        return _parse_failure(
            provider, path, f"top-level document is {type(raw).__name__}, expected a mapping"
        )

    normalized = normalize_document(raw)
    try:
        config = ProviderConfig.from_normalized(normalized)
    except (ValidationError, TypeError, ValueError, OverflowError) as exc:
        return _parse_failure(provider, path, f"{type(exc).__name__}: {exc}")

    logger.debug(
        "[model_config] Loaded model config",
        extra={
            "provider": provider.value,
            "path": str(path),
            "model_count": len(config.models),
            "default_model": config.default_model,
        },
    )
    return ProviderLoadResult(provider=provider, path=path, config=config)
