"""Sanity checks for the model documents shipped inside the package."""

import pytest

from llm_model_config.core.directory import BUNDLED_DIR
from llm_model_config.core.loader import load_provider_document
from llm_model_config.core.model_config import ModelConfigManager, strip_provider_prefix
from llm_model_config.core.providers import LOCAL_PROVIDERS, Provider


@pytest.mark.parametrize("provider", list(Provider))
def test_every_provider_ships_a_document(provider):
    result = load_provider_document(provider, BUNDLED_DIR)

    assert result.found, result.detail
    assert result.config.provider == provider.value
    assert result.config.models


@pytest.mark.parametrize("provider", list(Provider))
def test_default_model_is_listed(provider):
    config = load_provider_document(provider, BUNDLED_DIR).config

    default_name = strip_provider_prefix(provider.value, config.default_model)
    assert default_name in config.models


@pytest.mark.parametrize("provider", sorted(set(Provider) - LOCAL_PROVIDERS))
def test_remote_models_carry_context_and_pricing(provider):
    config = load_provider_document(provider, BUNDLED_DIR).config

    for name, model in config.models.items():
        assert model.context_window, name
        assert model.pricing is not None, name


def test_bundled_documents_validate_cleanly(isolated_resolver):
    manager = ModelConfigManager(resolver=isolated_resolver(BUNDLED_DIR))

    statuses = manager.validate_configuration()

    assert [status.provider for status in statuses] == list(Provider)
    assert all(status.found for status in statuses)
    assert all(status.issues == [] for status in statuses)


def test_bundled_lookups_through_manager(isolated_resolver):
    manager = ModelConfigManager(resolver=isolated_resolver(BUNDLED_DIR))

    assert manager.get_context_window("anthropic", "claude-3-5-sonnet-20241022") == 200000
    assert manager.require_default_model("xai") == "grok-3-mini"
    assert manager.require_default_model("openrouter") == "openai/gpt-4o-mini"
    assert manager.get_context_window("openrouter", "openai/gpt-4o-mini") == 128000
