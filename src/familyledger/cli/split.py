#!/usr/bin/env python3
"""
Split CLI - Transaction Split Allocation

Command-line interface for dividing an amount across family members.
"""

from decimal import Decimal, InvalidOperation

import click

from ..split import AllocationError, allocate_participants
from .options import currency_symbol, echo_json, format_option


@click.command()
@click.argument("amount")
@click.argument("participants", nargs=-1, required=True)
@format_option
def split(amount: str, participants: tuple[str, ...], output_format: str) -> None:
    """
    Split AMOUNT across PARTICIPANTS; the last one absorbs the residual.

    Examples:
      ledger split 10.00 ana luis sara
      ledger split 0.01 ana luis sara --format json
    """
    try:
        value = Decimal(amount)
    except InvalidOperation as e:
        raise click.BadParameter(f"Invalid amount {amount!r}", param_hint="AMOUNT") from e

    try:
        shares = allocate_participants(value, list(participants))
    except AllocationError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        echo_json({"amount": f"{value:.2f}", "participants": [p.to_dict() for p in shares]})
        return

    symbol = currency_symbol()
    for participant in shares:
        click.echo(f"{participant.user_id:<20} {participant.allocated_amount.format(symbol):>12}")
