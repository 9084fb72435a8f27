"""Tests for the `llm-model-config` command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from rich.console import Console

from llm_model_config.cli import cli as cli_module
from llm_model_config.core.directory import CONFIG_DIR_ENV


@pytest.fixture(autouse=True)
def _wide_console(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
    monkeypatch.setattr(cli_module, "console", Console(width=200))


def _run_cli(models_dir, args: list[str]):
    runner = CliRunner()
    return runner.invoke(cli_module.cli, ["--config-dir", str(models_dir), *args])


def test_help_lists_commands():
    result = CliRunner().invoke(cli_module.cli, ["--help"])
    assert result.exit_code == 0
    for command in ("dir", "providers", "models", "show", "default", "validate"):
        assert command in result.output


def test_dir_prints_configured_directory(models_dir):
    result = _run_cli(models_dir, ["dir"])
    assert result.exit_code == 0
    assert str(models_dir) in result.output


def test_dir_reads_directory_from_environment(models_dir, monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, str(models_dir))
    result = CliRunner().invoke(cli_module.cli, ["dir"])
    assert result.exit_code == 0
    assert str(models_dir) in result.output


def test_show_configured_model(models_dir, write_provider_doc, anthropic_doc):
    write_provider_doc("anthropic", anthropic_doc)

    result = _run_cli(models_dir, ["show", "anthropic", "claude-3-5-sonnet-20241022"])

    assert result.exit_code == 0
    assert "Context window: 200,000" in result.output
    assert "Max output tokens: 8,192" in result.output
    assert "Pricing: $3.00 in / $15.00 out per 1M tokens" in result.output
    assert "Capabilities: streaming, function_calling, vision" in result.output
    assert "using local defaults" not in result.output


def test_show_local_model_uses_defaults(models_dir):
    result = _run_cli(models_dir, ["show", "ollama", "mystery:7b"])

    assert result.exit_code == 0
    assert "(not configured; using local defaults)" in result.output
    assert "Context window: 4,096" in result.output
    assert "Pricing: $0.00 in / $0.00 out per 1M tokens" in result.output
    assert "Capabilities: chat, streaming" in result.output


def test_show_unknown_remote_model_fails(models_dir):
    result = _run_cli(models_dir, ["show", "openai", "gpt-99"])

    assert result.exit_code == 1
    assert "is not configured for openai" in result.output


def test_unknown_provider_is_rejected(models_dir):
    result = _run_cli(models_dir, ["models", "unknown_provider"])

    assert result.exit_code == 2
    assert "Unknown provider 'unknown_provider'" in result.output


def test_models_lists_configured_entries(models_dir, write_provider_doc, anthropic_doc):
    write_provider_doc("anthropic", anthropic_doc)

    result = _run_cli(models_dir, ["models", "anthropic"])

    assert result.exit_code == 0
    assert "claude-3-5-sonnet-20241022" in result.output
    assert "claude-3-5-haiku-20241022" in result.output
    assert "200,000" in result.output
    assert "$15.00" in result.output


def test_models_without_document(models_dir):
    result = _run_cli(models_dir, ["models", "mistral"])

    assert result.exit_code == 0
    assert "No models configured for mistral." in result.output


def test_default_strips_provider_prefix(models_dir, write_provider_doc):
    write_provider_doc("openai", {"default_model": "openai/gpt-4o-mini"})

    result = _run_cli(models_dir, ["default", "openai"])

    assert result.exit_code == 0
    assert result.output.strip() == "gpt-4o-mini"


def test_default_reports_missing_document(models_dir):
    result = _run_cli(models_dir, ["default", "mistral"])

    assert result.exit_code == 1
    assert "Missing configuration file" in result.output
    assert str(models_dir / "mistral.yml") in result.output


def test_default_reports_missing_key(models_dir, write_provider_doc):
    write_provider_doc("xai", {"models": {"grok-3": {}}})

    result = _run_cli(models_dir, ["default", "grok"])

    assert result.exit_code == 1
    assert "default_model" in result.output


def test_validate_passes_with_clean_documents(models_dir, write_provider_doc, anthropic_doc):
    anthropic_doc["models"]["claude-sonnet-4-20250514"] = {"context_window": 200000}
    write_provider_doc("anthropic", anthropic_doc)

    result = _run_cli(models_dir, ["validate"])

    assert result.exit_code == 0
    assert "anthropic: 3 models, default claude-sonnet-4-20250514" in result.output
    assert "mistral: no document" in result.output
    assert "Configuration looks good" in result.output


def test_validate_strict_fails_on_missing_documents(models_dir, write_provider_doc, anthropic_doc):
    anthropic_doc["models"]["claude-sonnet-4-20250514"] = {}
    write_provider_doc("anthropic", anthropic_doc)

    result = _run_cli(models_dir, ["validate", "--strict"])

    assert result.exit_code == 1
    assert "10 provider(s) with problems" in result.output


def test_validate_reports_broken_documents(models_dir, write_provider_doc):
    write_provider_doc("gemini", "models: [")
    write_provider_doc("openai", {"models": {"gpt-4o": {}}})

    result = _run_cli(models_dir, ["validate"])

    assert result.exit_code == 1
    assert "gemini: unreadable document" in result.output
    assert "openai: missing 'default_model'" in result.output
    assert "2 provider(s) with problems" in result.output


def test_providers_table_lists_every_provider(models_dir, write_provider_doc, anthropic_doc):
    write_provider_doc("anthropic", anthropic_doc)

    result = _run_cli(models_dir, ["providers"])

    assert result.exit_code == 0
    for name in ("anthropic", "openai", "ollama", "lmstudio", "bumblebee", "xai"):
        assert name in result.output
    assert "local" in result.output
