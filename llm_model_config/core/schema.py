"""Typed structures built from normalized provider documents."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from llm_model_config.core.keys import ConfigKey, key_text
from llm_model_config.utils.log import get_logger

logger = get_logger()

_TOKENS_PER_PRICE_UNIT = 1_000_000

_PROVIDER_FIELDS = {
    ConfigKey.PROVIDER,
    ConfigKey.DEFAULT_MODEL,
    ConfigKey.MODELS,
    ConfigKey.METADATA,
}

_MODEL_FIELDS = {
    ConfigKey.NAME,
    ConfigKey.CONTEXT_WINDOW,
    ConfigKey.MAX_OUTPUT_TOKENS,
    ConfigKey.CAPABILITIES,
    ConfigKey.PRICING,
    ConfigKey.DEFAULT,
    ConfigKey.ARCHITECTURE,
    ConfigKey.QUANTIZATION,
    ConfigKey.SUPPORTS_STREAMING,
    ConfigKey.SUPPORTS_TOOLS,
    ConfigKey.FEATURES,
}


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # .inf and .nan are valid YAML but meaningless as prices.
    return number if math.isfinite(number) else None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = key_text(value).strip()
    return text or None


def _capability_tags(value: Any) -> Tuple[str, ...]:
    """Accept either a list of tags or a mapping of tag -> enabled flag."""
    if isinstance(value, Mapping):
        return tuple(key_text(tag) for tag, enabled in value.items() if enabled)
    if isinstance(value, (list, tuple)):
        return tuple(
            key_text(tag) for tag in value if isinstance(tag, (str, int, float)) and tag != ""
        )
    if isinstance(value, str) and value:
        return (value,)
    return ()


class Pricing(BaseModel):
    """Token pricing in USD per one million tokens."""

    model_config = ConfigDict(frozen=True)

    input: Optional[float] = None
    output: Optional[float] = None

    @classmethod
    def free(cls) -> "Pricing":
        return cls(input=0.0, output=0.0)

    @classmethod
    def from_normalized(cls, data: Any) -> Optional["Pricing"]:
        if not isinstance(data, Mapping):
            return None
        return cls(
            input=_to_float(data.get(ConfigKey.INPUT)),
            output=_to_float(data.get(ConfigKey.OUTPUT)),
        )

    def estimate_cost(self, input_tokens: int = 0, output_tokens: int = 0) -> float:
        """Cost in USD for the given token counts; unpriced directions count as free."""
        input_cost = (self.input or 0.0) * input_tokens / _TOKENS_PER_PRICE_UNIT
        output_cost = (self.output or 0.0) * output_tokens / _TOKENS_PER_PRICE_UNIT
        return input_cost + output_cost


class ModelConfig(BaseModel):
    """Metadata for one model of one provider."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    context_window: Optional[int] = None
    max_output_tokens: Optional[int] = None
    capabilities: Tuple[str, ...] = ()
    pricing: Optional[Pricing] = None
    # Passed through normalized but not interpreted.
    default: Any = None
    architecture: Any = None
    quantization: Any = None
    supports_streaming: Any = None
    supports_tools: Any = None
    features: Any = None
    extra: Dict[Any, Any] = Field(default_factory=dict)

    @classmethod
    def from_normalized(cls, model_name: str, data: Mapping[Any, Any]) -> "ModelConfig":
        return cls(
            name=_to_str(data.get(ConfigKey.NAME)) or model_name,
            context_window=_to_int(data.get(ConfigKey.CONTEXT_WINDOW)),
            max_output_tokens=_to_int(data.get(ConfigKey.MAX_OUTPUT_TOKENS)),
            capabilities=_capability_tags(data.get(ConfigKey.CAPABILITIES)),
            pricing=Pricing.from_normalized(data.get(ConfigKey.PRICING)),
            default=data.get(ConfigKey.DEFAULT),
            architecture=data.get(ConfigKey.ARCHITECTURE),
            quantization=data.get(ConfigKey.QUANTIZATION),
            supports_streaming=data.get(ConfigKey.SUPPORTS_STREAMING),
            supports_tools=data.get(ConfigKey.SUPPORTS_TOOLS),
            features=data.get(ConfigKey.FEATURES),
            extra={key: value for key, value in data.items() if key not in _MODEL_FIELDS},
        )

    def has_capability(self, tag: str) -> bool:
        return tag in self.capabilities


class ProviderConfig(BaseModel):
    """Fully loaded, normalized document for one provider."""

    model_config = ConfigDict(frozen=True)

    provider: Optional[str] = None
    default_model: Optional[str] = None
    models: Dict[str, ModelConfig] = Field(default_factory=dict)
    metadata: Dict[Any, Any] = Field(default_factory=dict)

    @classmethod
    def from_normalized(cls, data: Mapping[Any, Any]) -> "ProviderConfig":
        provider = _to_str(data.get(ConfigKey.PROVIDER))

        models: Dict[str, ModelConfig] = {}
        raw_models = data.get(ConfigKey.MODELS)
        if isinstance(raw_models, Mapping):
            for raw_name, entry in raw_models.items():
                model_name = key_text(raw_name)
                if not isinstance(entry, Mapping):
                    logger.warning(
                        "[model_config] Skipping malformed model entry",
                        extra={"provider": provider, "model": model_name},
                    )
                    continue
                models[model_name] = ModelConfig.from_normalized(model_name, entry)
        elif raw_models is not None:
            logger.warning(
                "[model_config] Ignoring non-mapping 'models' section",
                extra={"provider": provider, "type": type(raw_models).__name__},
            )

        metadata: Dict[Any, Any] = {}
        raw_metadata = data.get(ConfigKey.METADATA)
        if isinstance(raw_metadata, Mapping):
            metadata.update(raw_metadata)
        elif raw_metadata is not None:
            metadata[ConfigKey.METADATA] = raw_metadata
        for key, value in data.items():
            if key not in _PROVIDER_FIELDS:
                metadata.setdefault(key, value)

        return cls(
            provider=provider,
            default_model=_to_str(data.get(ConfigKey.DEFAULT_MODEL)),
            models=models,
            metadata=metadata,
        )
