"""Query API over per-provider model configuration documents.

Lookups go through a :class:`ConfigCache` that loads each provider's YAML
document lazily from the directory picked by a :class:`DirectoryResolver`.

Field accessors never raise. For local providers (ollama, lmstudio,
bumblebee) a model missing from configuration gets conservative defaults;
for every other provider the same lookup returns ``None``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from llm_model_config.core.cache import ConfigCache
from llm_model_config.core.directory import DirectoryResolver, PathLike
from llm_model_config.core.errors import ConfigNotFoundError, LoadFailure, MissingDefaultModelError
from llm_model_config.core.loader import (
    DOCUMENT_SUFFIXES,
    ProviderLoadResult,
    document_path,
    load_provider_document,
)
from llm_model_config.core.providers import (
    Provider,
    coerce_provider,
    is_local_provider,
    provider_name,
)
from llm_model_config.core.schema import ModelConfig, Pricing, ProviderConfig
from llm_model_config.utils.log import get_logger

logger = get_logger()

ProviderArg = Union[Provider, str]

LOCAL_DEFAULT_CONTEXT_WINDOW = 4096
LOCAL_DEFAULT_MAX_OUTPUT_TOKENS = 4096
LOCAL_DEFAULT_CAPABILITIES = ("chat", "streaming")


def local_model_defaults() -> ModelConfig:
    """Aggregate defaults handed out for unconfigured local models."""
    return ModelConfig(
        context_window=LOCAL_DEFAULT_CONTEXT_WINDOW,
        max_output_tokens=LOCAL_DEFAULT_MAX_OUTPUT_TOKENS,
        capabilities=LOCAL_DEFAULT_CAPABILITIES,
        pricing=Pricing.free(),
    )


@dataclass(frozen=True)
class DefaultModelResult:
    """Default model lookup outcome: either ``model`` or ``error`` is set."""

    model: Optional[str] = None
    error: Optional[LoadFailure] = None
    path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.model is not None


@dataclass(frozen=True)
class ProviderStatus:
    """Diagnostic summary of one provider's document."""

    provider: Provider
    path: Path
    found: bool
    failure: Optional[LoadFailure] = None
    default_model: Optional[str] = None
    model_count: int = 0
    issues: List[str] = field(default_factory=list)


def strip_provider_prefix(provider: str, model: str) -> str:
    """Drop a redundant ``"<provider>/"`` namespace from ``model``."""
    head, separator, tail = model.partition("/")
    if separator and head == provider and tail:
        return tail
    return model


class ModelConfigManager:
    """Serve model metadata for every known provider."""

    def __init__(
        self,
        resolver: Optional[DirectoryResolver] = None,
        cache: Optional[ConfigCache] = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else DirectoryResolver.from_env()
        self.cache = cache if cache is not None else ConfigCache(self.load_document)

    # Storage-facing plumbing

    def load_document(self, provider: Provider) -> ProviderLoadResult:
        """Load ``provider``'s document from the resolved directory, bypassing the cache."""
        return load_provider_document(provider, self.resolver.resolve())

    def get_config_directory(self) -> Path:
        """Return the directory provider documents are read from."""
        return self.resolver.resolve()

    def set_config_directory(self, path: Optional[PathLike]) -> None:
        """Point lookups at ``path`` and drop every cached provider document.

        A path that does not exist falls through to automatic discovery.
        Passing None restores discovery.
        """
        self.resolver.set_configured_directory(path)
        self.cache.invalidate_all()
        logger.info(
            "[model_config] Model config directory overridden",
            extra={"path": None if path is None else os.fspath(path)},
        )

    def reload(self) -> bool:
        """Re-resolve the directory, clear the cache and eagerly load every provider."""
        self.resolver.reset()
        self.cache.invalidate_all()
        results = self.cache.warm_all()
        logger.info(
            "[model_config] Reloaded model configuration",
            extra={
                "path": str(self.resolver.resolve()),
                "loaded": [p.value for p, result in results.items() if result.found],
            },
        )
        return True

    def _result(self, provider: ProviderArg) -> Optional[ProviderLoadResult]:
        resolved = coerce_provider(provider)
        if resolved is None:
            return None
        return self.cache.get(resolved)

    def get_provider_config(self, provider: ProviderArg) -> Optional[ProviderConfig]:
        result = self._result(provider)
        return result.config if result is not None else None

    def _expected_path(self, provider: ProviderArg) -> Path:
        resolved = coerce_provider(provider)
        directory = self.get_config_directory()
        if resolved is not None:
            return document_path(resolved, directory)
        return directory / f"{provider_name(provider)}{DOCUMENT_SUFFIXES[0]}"

    # Per-model accessors

    def get_model_config(self, provider: ProviderArg, model: str) -> Optional[ModelConfig]:
        """Return the configured entry for ``model``, or None."""
        config = self.get_provider_config(provider)
        if config is None:
            return None
        return config.models.get(model)

    def get_model_config_with_defaults(
        self, provider: ProviderArg, model: str
    ) -> Optional[ModelConfig]:
        """Like :meth:`get_model_config`, with local-provider defaults on a miss."""
        model_config = self.get_model_config(provider, model)
        if model_config is not None:
            return model_config
        if is_local_provider(provider):
            return local_model_defaults()
        return None

    def get_pricing(self, provider: ProviderArg, model: str) -> Optional[Pricing]:
        """Pricing per 1M tokens; local providers are free unless configured otherwise."""
        local = is_local_provider(provider)
        model_config = self.get_model_config(provider, model)
        if model_config is None or model_config.pricing is None:
            return Pricing.free() if local else None
        return model_config.pricing

    def get_context_window(self, provider: ProviderArg, model: str) -> Optional[int]:
        model_config = self.get_model_config(provider, model)
        if model_config is None:
            if is_local_provider(provider):
                return LOCAL_DEFAULT_CONTEXT_WINDOW
            return None
        return model_config.context_window

    def get_capabilities(self, provider: ProviderArg, model: str) -> Optional[List[str]]:
        model_config = self.get_model_config(provider, model)
        if model_config is None:
            if is_local_provider(provider):
                return list(LOCAL_DEFAULT_CAPABILITIES)
            return None
        return list(model_config.capabilities)

    def get_max_output_tokens(self, provider: ProviderArg, model: str) -> Optional[int]:
        model_config = self.get_model_config(provider, model)
        if model_config is None:
            if is_local_provider(provider):
                return LOCAL_DEFAULT_MAX_OUTPUT_TOKENS
            return None
        return model_config.max_output_tokens

    def estimate_cost(
        self,
        provider: ProviderArg,
        model: str,
        input_tokens: int = 0,
        output_tokens: int = 0,
    ) -> Optional[float]:
        """USD cost of a request, or None when the model has no known pricing."""
        pricing = self.get_pricing(provider, model)
        if pricing is None:
            return None
        return pricing.estimate_cost(input_tokens, output_tokens)

    # Default model

    def get_default_model(self, provider: ProviderArg) -> DefaultModelResult:
        """Return the provider's default model without raising.

        Errors are ``LoadFailure.CONFIG_NOT_FOUND`` when the provider has no
        usable document and ``LoadFailure.MISSING_DEFAULT_MODEL`` when the
        document lacks ``default_model``.
        """
        result = self._result(provider)
        if result is None or result.config is None:
            path = result.path if result is not None else self._expected_path(provider)
            return DefaultModelResult(error=LoadFailure.CONFIG_NOT_FOUND, path=path)

        model = result.config.default_model
        if model is None:
            return DefaultModelResult(error=LoadFailure.MISSING_DEFAULT_MODEL, path=result.path)
        return DefaultModelResult(
            model=strip_provider_prefix(result.provider.value, model),
            path=result.path,
        )

    def require_default_model(self, provider: ProviderArg) -> str:
        """Return the provider's default model, raising when it cannot be determined."""
        outcome = self.get_default_model(provider)
        if outcome.error is None and outcome.model is not None:
            return outcome.model
        path = outcome.path or self._expected_path(provider)
        if outcome.error == LoadFailure.MISSING_DEFAULT_MODEL:
            raise MissingDefaultModelError(provider_name(provider), path)
        raise ConfigNotFoundError(provider_name(provider), path)

    # Bulk accessors

    def get_all_models(self, provider: ProviderArg) -> Dict[str, ModelConfig]:
        config = self.get_provider_config(provider)
        if config is None:
            return {}
        return dict(config.models)

    def get_all_pricing(self, provider: ProviderArg) -> Dict[str, Pricing]:
        return {
            name: model.pricing
            for name, model in self.get_all_models(provider).items()
            if model.pricing is not None
        }

    def get_all_context_windows(self, provider: ProviderArg) -> Dict[str, int]:
        return {
            name: model.context_window
            for name, model in self.get_all_models(provider).items()
            if model.context_window is not None
        }

    # Diagnostics

    def validate_configuration(self) -> List[ProviderStatus]:
        """Summarize every known provider's document for startup checks."""
        statuses: List[ProviderStatus] = []
        for provider in self.cache.providers:
            result = self.cache.get(provider)
            config = result.config
            issues: List[str] = []
            if config is None:
                if result.failure == LoadFailure.PARSE_FAILURE:
                    issues.append(f"unreadable document: {result.detail}")
                elif result.failure == LoadFailure.STORAGE_UNAVAILABLE:
                    issues.append(f"storage unavailable: {result.detail}")
                statuses.append(
                    ProviderStatus(
                        provider=provider,
                        path=result.path,
                        found=False,
                        failure=result.failure,
                        issues=issues,
                    )
                )
                continue

            if config.default_model is None:
                issues.append("missing 'default_model'")
            else:
                default_name = strip_provider_prefix(provider.value, config.default_model)
                if config.models and default_name not in config.models:
                    issues.append(f"default model '{default_name}' is not listed under 'models'")
            if not config.models:
                issues.append("no models configured")
            statuses.append(
                ProviderStatus(
                    provider=provider,
                    path=result.path,
                    found=True,
                    default_model=config.default_model,
                    model_count=len(config.models),
                    issues=issues,
                )
            )
        return statuses


# Global instance
model_config_manager = ModelConfigManager()


def get_config_directory() -> Path:
    """Get the directory provider documents are read from."""
    return model_config_manager.get_config_directory()


def set_config_directory(path: Optional[PathLike]) -> None:
    """Override the model config directory and invalidate the cache."""
    model_config_manager.set_config_directory(path)


def reload_config() -> bool:
    """Clear the cache and reload every provider document."""
    return model_config_manager.reload()


def get_pricing(provider: ProviderArg, model: str) -> Optional[Pricing]:
    return model_config_manager.get_pricing(provider, model)


def get_context_window(provider: ProviderArg, model: str) -> Optional[int]:
    return model_config_manager.get_context_window(provider, model)


def get_capabilities(provider: ProviderArg, model: str) -> Optional[List[str]]:
    return model_config_manager.get_capabilities(provider, model)


def get_max_output_tokens(provider: ProviderArg, model: str) -> Optional[int]:
    return model_config_manager.get_max_output_tokens(provider, model)


def get_model_config(provider: ProviderArg, model: str) -> Optional[ModelConfig]:
    return model_config_manager.get_model_config(provider, model)


def get_model_config_with_defaults(provider: ProviderArg, model: str) -> Optional[ModelConfig]:
    return model_config_manager.get_model_config_with_defaults(provider, model)


def get_default_model(provider: ProviderArg) -> DefaultModelResult:
    return model_config_manager.get_default_model(provider)


def require_default_model(provider: ProviderArg) -> str:
    """Get the default model, raising a descriptive error on failure."""
    return model_config_manager.require_default_model(provider)


def get_all_models(provider: ProviderArg) -> Dict[str, ModelConfig]:
    return model_config_manager.get_all_models(provider)


def get_all_pricing(provider: ProviderArg) -> Dict[str, Pricing]:
    return model_config_manager.get_all_pricing(provider)


def get_all_context_windows(provider: ProviderArg) -> Dict[str, int]:
    return model_config_manager.get_all_context_windows(provider)


def estimate_cost(
    provider: ProviderArg, model: str, input_tokens: int = 0, output_tokens: int = 0
) -> Optional[float]:
    return model_config_manager.estimate_cost(provider, model, input_tokens, output_tokens)


def validate_configuration() -> List[ProviderStatus]:
    return model_config_manager.validate_configuration()
