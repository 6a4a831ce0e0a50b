"""
Admin - Owner-only Master operations and body inspection.
"""

from __future__ import annotations

import dataclasses
import sys

import click

from ..chain.code import load_code
from ..utils import cell_from_base64, format_ton
from ..wrappers.bodies import parse_body
from ..wrappers.content import parse_onchain_metadata
from .common import TON_AMOUNT, api_options, dispatch, master_option, resolve_master


@click.command()
@master_option
@click.option("--amount", "nano", required=True, type=TON_AMOUNT, help="TON to withdraw (e.g. 1.5)")
@api_options
def withdraw(master_address: str, nano: int, api_url: str, api_key: str) -> None:
    """Withdraw funds from the Master to its owner."""
    click.echo("=== tonmaster Withdraw ===")
    click.echo("")

    master = resolve_master(master_address)
    if nano <= 0:
        click.secho("ERROR: Amount must be positive", fg="red")
        sys.exit(1)

    click.echo(f"  Amount: {format_ton(nano)}")
    dispatch(
        "Withdraw",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_withdraw(provider, via, nano),
    )


@click.command("update-code")
@master_option
@click.option("--code", "code_name", required=True, help="Compiled contract name with the new code")
@api_options
def update_code(master_address: str, code_name: str, api_url: str, api_key: str) -> None:
    """Replace the Master contract code."""
    click.echo("=== tonmaster Update Code ===")
    click.echo("")

    master = resolve_master(master_address)
    try:
        code = load_code(code_name)
    except (FileNotFoundError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"  Code hash: {code.bytes_hash().hex()}")
    dispatch(
        "Update code",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_update_dapp_code(provider, via, code),
    )


@click.command()
@click.argument("body_b64")
def decode(body_b64: str) -> None:
    """Decode a Master message body given as base64 BoC."""
    try:
        parsed = parse_body(cell_from_base64(body_b64))
    except Exception as exc:
        click.secho(f"ERROR: Cannot decode body: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"{type(parsed).__name__} (op={parsed.op:#010x})")
    for field in dataclasses.fields(parsed):
        if field.name == "op":
            continue
        value = getattr(parsed, field.name)
        if field.name == "metadata":
            attrs = parse_onchain_metadata(value)
            click.echo(f"  {field.name}: {len(value)} entries")
            for name, text in attrs.items():
                click.echo(f"    {name} = {text}")
        elif field.name.endswith("amount"):
            click.echo(f"  {field.name}: {format_ton(value)}")
        elif hasattr(value, "bytes_hash"):
            click.echo(f"  {field.name}: cell {value.bytes_hash().hex()}")
        else:
            click.echo(f"  {field.name}: {value}")
