"""Command-line interface for inspecting provider model configuration."""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from llm_model_config import __version__
from llm_model_config.core.directory import DirectoryResolver
from llm_model_config.core.errors import ModelConfigError
from llm_model_config.core.model_config import ModelConfigManager, ProviderStatus
from llm_model_config.core.providers import LOCAL_PROVIDERS, Provider, coerce_provider
from llm_model_config.core.schema import Pricing
from llm_model_config.utils.log import enable_file_logging, get_logger

console = Console()
logger = get_logger()


def _manager(ctx: click.Context) -> ModelConfigManager:
    manager = ctx.find_object(ModelConfigManager)
    if manager is None:
        raise click.UsageError("Model configuration is not initialized.")
    return manager


def _provider_callback(_ctx: click.Context, _param: click.Parameter, value: str) -> Provider:
    provider = coerce_provider(value)
    if provider is None:
        choices = ", ".join(p.value for p in Provider)
        raise click.BadParameter(f"Unknown provider '{value}'. Choose from: {choices}")
    return provider


def _fmt_tokens(value: Optional[int]) -> str:
    return f"{value:,}" if value is not None else "-"


def _fmt_price(pricing: Optional[Pricing]) -> Tuple[str, str]:
    if pricing is None:
        return ("-", "-")

    def _one(amount: Optional[float]) -> str:
        return f"${amount:.2f}" if amount is not None else "-"

    return (_one(pricing.input), _one(pricing.output))


def _status_row(status: ProviderStatus) -> Tuple[str, str, str, str]:
    if not status.found:
        if status.issues:
            icon = "[red]×[/red]"
            detail = "; ".join(status.issues)
        else:
            icon = "[yellow]-[/yellow]"
            detail = "no document"
    elif status.issues:
        icon = "[yellow]![/yellow]"
        detail = "; ".join(status.issues)
    else:
        icon = "[green]✓[/green]"
        detail = f"{status.model_count} models, default {status.default_model}"
    kind = "local" if status.provider in LOCAL_PROVIDERS else "remote"
    return (status.provider.value, kind, icon, escape(detail))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding <provider>.yml documents",
)
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Write debug logs here")
@click.pass_context
def cli(ctx: click.Context, config_dir: Optional[Path], log_file: Optional[Path]) -> None:
    """Inspect per-provider LLM model configuration."""
    if log_file is not None:
        enable_file_logging(log_file)
    manager = ModelConfigManager(resolver=DirectoryResolver.from_env())
    if config_dir is not None:
        manager.set_config_directory(config_dir)
    ctx.obj = manager
    logger.debug(
        "[cli] Starting CLI invocation",
        extra={"config_dir": str(config_dir) if config_dir else None},
    )


@cli.command(name="dir")
@click.pass_context
def dir_cmd(ctx: click.Context) -> None:
    """Show the resolved configuration directory"""
    console.print(escape(str(_manager(ctx).get_config_directory())), soft_wrap=True)


@cli.command(name="providers")
@click.pass_context
def providers_cmd(ctx: click.Context) -> None:
    """List known providers and whether each has a document"""
    manager = _manager(ctx)
    table = Table(title=f"Providers ({escape(str(manager.get_config_directory()))})")
    table.add_column("Provider")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Detail")
    for status in manager.validate_configuration():
        table.add_row(*_status_row(status))
    console.print(table)


@cli.command(name="models")
@click.argument("provider", callback=_provider_callback)
@click.pass_context
def models_cmd(ctx: click.Context, provider: Provider) -> None:
    """List configured models for PROVIDER"""
    models = _manager(ctx).get_all_models(provider)
    if not models:
        console.print(f"[yellow]No models configured for {provider.value}.[/yellow]")
        return

    table = Table(title=f"{provider.value} models")
    table.add_column("Model")
    table.add_column("Context", justify="right")
    table.add_column("Max output", justify="right")
    table.add_column("Input $/1M", justify="right")
    table.add_column("Output $/1M", justify="right")
    table.add_column("Capabilities")
    for name, model in sorted(models.items()):
        price_in, price_out = _fmt_price(model.pricing)
        table.add_row(
            escape(name),
            _fmt_tokens(model.context_window),
            _fmt_tokens(model.max_output_tokens),
            price_in,
            price_out,
            escape(", ".join(model.capabilities)),
        )
    console.print(table)


@cli.command(name="show")
@click.argument("provider", callback=_provider_callback)
@click.argument("model")
@click.pass_context
def show_cmd(ctx: click.Context, provider: Provider, model: str) -> None:
    """Show metadata for MODEL, with local-provider defaults applied"""
    manager = _manager(ctx)
    model_config = manager.get_model_config_with_defaults(provider, model)
    if model_config is None:
        console.print(f"[red]Model {escape(model)} is not configured for {provider.value}.[/red]")
        sys.exit(1)

    configured = manager.get_model_config(provider, model) is not None
    price_in, price_out = _fmt_price(manager.get_pricing(provider, model))
    console.print(f"\n[bold]{escape(provider.value)}/{escape(model)}[/bold]")
    if not configured:
        console.print("[dim](not configured; using local defaults)[/dim]")
    console.print(f"Context window: {_fmt_tokens(model_config.context_window)}")
    console.print(f"Max output tokens: {_fmt_tokens(model_config.max_output_tokens)}")
    console.print(f"Pricing: {price_in} in / {price_out} out per 1M tokens")
    console.print(f"Capabilities: {escape(', '.join(model_config.capabilities)) or '-'}\n")


@cli.command(name="default")
@click.argument("provider", callback=_provider_callback)
@click.pass_context
def default_cmd(ctx: click.Context, provider: Provider) -> None:
    """Print the default model for PROVIDER"""
    try:
        model = _manager(ctx).require_default_model(provider)
    except ModelConfigError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        sys.exit(1)
    console.print(escape(model), soft_wrap=True)


@cli.command(name="validate")
@click.option("--strict", is_flag=True, help="Also fail when a provider has no document")
@click.pass_context
def validate_cmd(ctx: click.Context, strict: bool) -> None:
    """Check every provider document and report problems"""
    statuses = _manager(ctx).validate_configuration()
    problems: List[ProviderStatus] = [
        status
        for status in statuses
        if status.issues or (strict and not status.found)
    ]
    for status in statuses:
        name, _kind, icon, detail = _status_row(status)
        console.print(f" {icon} {name}: {detail}")

    if problems:
        console.print(f"\n[red]{len(problems)} provider(s) with problems[/red]")
        sys.exit(1)
    console.print("\n[green]Configuration looks good[/green]")


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except (RuntimeError, ValueError, TypeError, OSError) as e:
        console.print(f"[red]Fatal error: {escape(str(e))}[/red]")
        logger.warning(
            "[cli] Fatal error in main CLI entrypoint: %s: %s",
            type(e).__name__,
            e,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
