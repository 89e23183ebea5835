"""
CLI interface for Multi-API Translator.

Provides command-line access to translation and provider settings.
"""

import logging
import sys
from dataclasses import replace
from typing import Callable, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from multi_api_translator.config.loader import (
    default_translator_config,
    load_translator_config,
    TranslatorConfig
)
from multi_api_translator.core.dispatcher import TranslationDispatcher
from multi_api_translator.core.errors import TranslationError
from multi_api_translator.storage.models import Provider
from multi_api_translator.storage.repository import initialize_schema

app = typer.Typer()
console = Console()

EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config(config_path: Optional[str], db_path: Optional[str]) -> TranslatorConfig:
    config = load_translator_config(config_path) if config_path else default_translator_config()
    if db_path:
        config = replace(config, database_path=db_path)
    return config


def build_dispatcher(ctx: typer.Context) -> TranslationDispatcher:
    """Create a dispatcher from the options given to the main callback."""
    return TranslationDispatcher.from_config(ctx.obj)


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/] {message}")
    sys.exit(EXIT_CODE_FAIL)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="MULTI_API_TRANSLATOR_CONFIG",
        help="Path to YAML configuration file"
    ),
    db: Optional[str] = typer.Option(
        None,
        "--db",
        help="Path to settings database (overrides the config file)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """Multi-API Translator CLI."""
    _configure_logging(verbose)
    try:
        ctx.obj = _load_config(config, db)
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(str(e))
    if ctx.invoked_subcommand is None:
        console.print("Multi-API Translator - Use --help to see available commands")


@app.command()
def init(ctx: typer.Context):
    """Initialize the settings database."""
    try:
        initialize_schema(ctx.obj.database_path)
        console.print("[green]✓[/] Database initialized successfully")
        sys.exit(EXIT_CODE_OK)
    except Exception as e:
        console.print(f"[red]Error initializing database:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)


@app.command()
def translate(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to translate"),
    source: str = typer.Option("Indonesian", "--from", "-f", help="Source language"),
    target: str = typer.Option("Japanese", "--to", "-t", help="Target language")
):
    """Translate text with the first available provider."""
    try:
        dispatcher = build_dispatcher(ctx)
        result = dispatcher.dispatch(text, source, target)
    except (TranslationError, ValueError) as e:
        _fail(str(e))

    console.print(result.translated_text)
    console.print(
        f"[dim]via {result.provider_name} (confidence {result.confidence:.2f})[/]"
    )
    sys.exit(EXIT_CODE_OK)


@app.command()
def interactive(
    ctx: typer.Context,
    source: str = typer.Option("Indonesian", "--from", "-f", help="Source language"),
    target: str = typer.Option("Japanese", "--to", "-t", help="Target language")
):
    """
    Translate lines interactively until an empty line is entered.

    The daily usage reset runs in the background for the whole session.
    """
    try:
        dispatcher = build_dispatcher(ctx)
    except ValueError as e:
        _fail(str(e))

    dispatcher.start()
    try:
        while True:
            text = typer.prompt(f"{source} → {target}", default="", show_default=False)
            if not text.strip():
                break
            try:
                result = dispatcher.dispatch(text, source, target)
            except TranslationError as e:
                console.print(f"[red]Error:[/] {e}")
                continue
            console.print(f"{result.translated_text} [dim]({result.provider_name})[/]")
    except typer.Abort:
        pass
    finally:
        dispatcher.stop()
    sys.exit(EXIT_CODE_OK)


@app.command()
def providers(ctx: typer.Context):
    """List providers in fallback order with their usage."""
    try:
        dispatcher = build_dispatcher(ctx)
    except ValueError as e:
        _fail(str(e))

    table = Table(title="Translation Providers")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("On")
    table.add_column("Prio", justify="right")
    table.add_column("Used/Quota", justify="right")
    table.add_column("Key")

    for provider in dispatcher.providers():
        table.add_row(
            provider.id,
            provider.name,
            "[green]yes[/]" if provider.enabled else "[red]no[/]",
            str(provider.priority),
            f"{provider.used_today}/{provider.daily_quota}",
            "yes" if provider.api_key else "-"
        )
    console.print(table)


def _update(ctx: typer.Context, change: Callable[[TranslationDispatcher], Provider]) -> None:
    try:
        dispatcher = build_dispatcher(ctx)
        provider = change(dispatcher)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] Updated {provider.name}")
    sys.exit(EXIT_CODE_OK)


@app.command()
def enable(ctx: typer.Context, provider_id: str = typer.Argument(..., help="Provider id")):
    """Enable a provider."""
    _update(ctx, lambda d: d.set_enabled(provider_id, True))


@app.command()
def disable(ctx: typer.Context, provider_id: str = typer.Argument(..., help="Provider id")):
    """Disable a provider."""
    _update(ctx, lambda d: d.set_enabled(provider_id, False))


@app.command("set-priority")
def set_priority(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., help="Provider id"),
    priority: int = typer.Argument(..., help="Lower values are tried first")
):
    """Change a provider's priority."""
    _update(ctx, lambda d: d.set_priority(provider_id, priority))


@app.command("set-quota")
def set_quota(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., help="Provider id"),
    daily_quota: int = typer.Argument(..., help="Maximum successful calls per day")
):
    """Change a provider's daily quota."""
    _update(ctx, lambda d: d.set_daily_quota(provider_id, daily_quota))


@app.command("set-key")
def set_key(
    ctx: typer.Context,
    provider_id: str = typer.Argument(..., help="Provider id"),
    api_key: str = typer.Argument(..., help="API key for the provider")
):
    """Save a provider's API key."""
    try:
        dispatcher = build_dispatcher(ctx)
        provider = dispatcher.save_credential(provider_id, api_key)
    except ValueError as e:
        _fail(str(e))
    console.print(f"[green]✓[/] API key saved for {provider.name}")
    sys.exit(EXIT_CODE_OK)


@app.command("reset-usage")
def reset_usage(ctx: typer.Context):
    """Reset every provider's daily usage counter."""
    try:
        dispatcher = build_dispatcher(ctx)
    except ValueError as e:
        _fail(str(e))
    dispatcher.reset_daily_usage()
    console.print("[green]✓[/] Daily usage has been reset")
    sys.exit(EXIT_CODE_OK)


if __name__ == "__main__":
    app()
