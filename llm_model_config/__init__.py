"""Per-provider LLM model metadata loaded from YAML configuration documents."""

__version__ = "0.1.0"

from llm_model_config.core.errors import (
    ConfigNotFoundError,
    LoadFailure,
    MissingDefaultModelError,
    ModelConfigError,
)
from llm_model_config.core.model_config import (
    DefaultModelResult,
    ModelConfigManager,
    estimate_cost,
    get_all_context_windows,
    get_all_models,
    get_all_pricing,
    get_capabilities,
    get_config_directory,
    get_context_window,
    get_default_model,
    get_max_output_tokens,
    get_model_config,
    get_model_config_with_defaults,
    get_pricing,
    model_config_manager,
    reload_config,
    require_default_model,
    set_config_directory,
    validate_configuration,
)
from llm_model_config.core.providers import LOCAL_PROVIDERS, Provider
from llm_model_config.core.schema import ModelConfig, Pricing, ProviderConfig

__all__ = [
    "__version__",
    "ConfigNotFoundError",
    "DefaultModelResult",
    "LOCAL_PROVIDERS",
    "LoadFailure",
    "MissingDefaultModelError",
    "ModelConfig",
    "ModelConfigError",
    "ModelConfigManager",
    "Pricing",
    "Provider",
    "ProviderConfig",
    "estimate_cost",
    "get_all_context_windows",
    "get_all_models",
    "get_all_pricing",
    "get_capabilities",
    "get_config_directory",
    "get_context_window",
    "get_default_model",
    "get_max_output_tokens",
    "get_model_config",
    "get_model_config_with_defaults",
    "get_pricing",
    "model_config_manager",
    "reload_config",
    "require_default_model",
    "set_config_directory",
    "validate_configuration",
]
