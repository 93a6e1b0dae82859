#!/usr/bin/env python3
"""
Main CLI Entry Point for Family Ledger

Provides the unified command-line interface for splitting and reporting.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Family Ledger - Split and Aggregate Engine

    Exact per-member splitting of family transactions, plus summaries,
    KPIs and side-by-side comparisons.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["LEDGER_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config_obj = reload_config() if (config_env or debug) else get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("familyledger").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}", err=True)
        click.echo(f"Data directory: {config_obj.data_dir}", err=True)

    if debug:
        click.echo("Debug logging enabled", err=True)


@main.command()
def version() -> None:
    """Show version information."""
    from familyledger import __author__, __version__

    click.echo(f"Family Ledger v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Transactions File: {config_obj.reports.transactions_file}")
    click.echo(f"  Top N: {config_obj.reports.top_n}")
    click.echo(f"  Currency Symbol: {config_obj.reports.currency_symbol}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .compare import compare, compare_months_command  # noqa: E402
from .report import report  # noqa: E402
from .split import split  # noqa: E402

main.add_command(split)
main.add_command(report)
main.add_command(compare)
main.add_command(compare_months_command)


if __name__ == "__main__":
    main()
