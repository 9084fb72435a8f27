"""Closed set of providers that can carry a model configuration document."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, FrozenSet, Optional


class Provider(str, Enum):
    """Supported LLM backends, one configuration document each."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    OLLAMA = "ollama"
    BEDROCK = "bedrock"
    MISTRAL = "mistral"
    PERPLEXITY = "perplexity"
    BUMBLEBEE = "bumblebee"
    LMSTUDIO = "lmstudio"
    XAI = "xai"

    @classmethod
    def _legacy_aliases(cls) -> Dict[str, "Provider"]:
        """Alternate spellings accepted when coercing text."""
        return {
            "google": cls.GEMINI,
            "lm_studio": cls.LMSTUDIO,
            "lm-studio": cls.LMSTUDIO,
            "grok": cls.XAI,
        }

    @classmethod
    def _missing_(cls, value: object) -> Optional["Provider"]:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
            return cls._legacy_aliases().get(normalized)
        return None


LOCAL_PROVIDERS: FrozenSet[Provider] = frozenset(
    {Provider.OLLAMA, Provider.LMSTUDIO, Provider.BUMBLEBEE}
)


def coerce_provider(value: Any) -> Optional[Provider]:
    """Return the matching Provider, or None when ``value`` names no known backend."""
    if isinstance(value, Provider):
        return value
    try:
        return Provider(value)
    except (TypeError, ValueError):
        return None


def is_local_provider(value: Any) -> bool:
    """True for self-hosted/on-device backends that get conservative defaults."""
    return coerce_provider(value) in LOCAL_PROVIDERS


def provider_name(value: Any) -> str:
    """Best-effort display name for a provider argument."""
    provider = coerce_provider(value)
    if provider is not None:
        return provider.value
    return str(getattr(value, "value", value))


def known_providers() -> tuple[Provider, ...]:
    return tuple(Provider)
