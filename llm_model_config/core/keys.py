"""Allow-list normalization of configuration document keys.

Provider documents are semi-trusted text. Their keys are mapped onto the
closed :class:`ConfigKey` enumeration through a fixed table; anything the
table does not know is kept as the original object so forward-compatible
fields survive a round trip without growing the internal key space.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping


class ConfigKey(str, Enum):
    """Internal symbolic keys for normalized configuration documents."""

    # Top-level document fields
    PROVIDER = "provider"
    DEFAULT_MODEL = "default_model"
    MODELS = "models"
    METADATA = "metadata"
    # Model fields
    NAME = "name"
    CONTEXT_WINDOW = "context_window"
    MAX_OUTPUT_TOKENS = "max_output_tokens"
    CAPABILITIES = "capabilities"
    PRICING = "pricing"
    DEFAULT = "default"
    ARCHITECTURE = "architecture"
    QUANTIZATION = "quantization"
    SUPPORTS_STREAMING = "supports_streaming"
    SUPPORTS_TOOLS = "supports_tools"
    FEATURES = "features"
    # Pricing fields
    INPUT = "input"
    OUTPUT = "output"
    # Capability fields
    VISION = "vision"
    FUNCTION_CALLING = "function_calling"
    STREAMING = "streaming"
    EMBEDDINGS = "embeddings"
    AUDIO = "audio"
    TOOLS = "tools"
    # Feature flags
    SUPPORTED = "supported"
    FORMATS = "formats"


_CONFIG_KEY_MAPPINGS: Dict[str, ConfigKey] = {key.value: key for key in ConfigKey}


def normalize_key(raw_key: Any) -> Any:
    """Map ``raw_key`` to its ConfigKey, or return it unchanged when unknown."""
    if isinstance(raw_key, ConfigKey):
        return raw_key
    if isinstance(raw_key, str):
        return _CONFIG_KEY_MAPPINGS.get(raw_key, raw_key)
    return raw_key


def normalize_document(value: Any) -> Any:
    """Recursively normalize every mapping key inside ``value``.

    Mappings are rebuilt key/value-wise, lists and tuples element-wise, and
    scalars are returned as-is. Running it twice yields the same structure.
    """
    if isinstance(value, Mapping):
        return {normalize_key(key): normalize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_document(item) for item in value]
    if isinstance(value, tuple):
        return tuple(normalize_document(item) for item in value)
    return value


def key_text(key: Any) -> str:
    """Return the external text for a normalized or pass-through key."""
    if isinstance(key, ConfigKey):
        return key.value
    return str(key)


def known_keys() -> frozenset[str]:
    """External key spellings recognized by the allow-list."""
    return frozenset(_CONFIG_KEY_MAPPINGS)
