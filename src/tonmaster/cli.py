"""
tonmaster CLI

Command-line interface for the Master collection-factory contract.

Identity = a TON wallet derived from a 24-word mnemonic. Every command
builds one message body and sends it from that wallet through toncenter.

Commands:
  wallet-new        - Create a wallet mnemonic
  whoami            - Show current wallet address
  address           - Derive a Master address from code + config
  deploy            - Deploy a Master
  deploy-collection - Deploy a sub-collection
  deploy-item       - Deploy an NFT/SBT item
  transfer-item     - Transfer an item
  edit-content      - Replace item content
  destroy-sbt       - Destroy a soulbound item
  withdraw          - Withdraw Master funds
  update-code       - Replace Master code
  decode            - Decode a message body
  info              - Show configuration
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click

from .chain.code import master_code
from .chain.rpc import get_toncenter_url
from .keys.wallet import (
    TONMASTER_ENV,
    generate_wallet,
    get_address,
    load_mnemonic,
    save_mnemonic,
)
from .wrappers import opcodes
from .wrappers.master import Master, MasterConfig


# ============ Constants ============

VERSION = "0.3.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="tonmaster")
@click.option("-v", "--verbose", is_flag=True, help="Log API calls and sent messages")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tonmaster: Master contract toolkit for TON."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.admin import decode, update_code, withdraw
from .commands.deploy import deploy, deploy_collection, deploy_item
from .commands.item import destroy_sbt, edit_content, transfer_item

cli.add_command(deploy)
cli.add_command(deploy_collection)
cli.add_command(deploy_item)
cli.add_command(transfer_item)
cli.add_command(edit_content)
cli.add_command(destroy_sbt)
cli.add_command(withdraw)
cli.add_command(update_code)
cli.add_command(decode)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show current wallet identity."""
    try:
        address = get_address(load_mnemonic())
        click.echo(f"Address: {address}")
    except (ValueError, FileNotFoundError):
        click.echo("No wallet found.")
        click.echo("Run 'tonmaster wallet-new' to create one.")
        sys.exit(1)


@cli.command("wallet-new")
@click.option("--force", is_flag=True, help="Overwrite an existing mnemonic")
def wallet_new(force: bool) -> None:
    """Create a wallet and store its mnemonic in ~/.tonmaster/.env."""
    if not force:
        try:
            load_mnemonic()
            click.secho("A wallet already exists. Use --force to replace it.", fg="yellow")
            sys.exit(1)
        except ValueError:
            pass

    mnemonics, address = generate_wallet()
    env_path = save_mnemonic(mnemonics)
    click.echo(f"Address: {address}")
    click.echo(f"Mnemonic saved to {env_path}")


# ============ Address ============


@cli.command()
@click.option("--owner", default=None, help="Owner address (default: your wallet)")
@click.option("--next-index", default=0, type=int, help="Next collection index")
@click.option("--workchain", default=0, type=int, help="Workchain id")
@click.option("--build-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory with compiled contracts (default: auto-detect)")
def address(owner: Optional[str], next_index: int, workchain: int, build_dir: Optional[Path]) -> None:
    """Derive the address a Master would deploy to."""
    try:
        owner = owner or get_address(load_mnemonic())
        master = Master.create_from_config(
            MasterConfig(owner, next_index), master_code(build_dir), workchain
        )
    except Exception as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"Address: {master.address.to_string(True, True, True)}")
    click.echo(f"Raw:     {master.address.to_string(False)}")


# ============ Info ============


@cli.command()
def info() -> None:
    """Show configuration and known opcodes."""
    click.echo(f"tonmaster v{VERSION}")
    click.echo()

    try:
        wallet_text = get_address(load_mnemonic())
    except Exception:
        wallet_text = click.style("not initialized", fg="yellow") + click.style(
            "  (run: tonmaster wallet-new)", dim=True
        )
    click.echo(click.style("  Wallet:  ", dim=True) + wallet_text)
    click.echo(click.style("  API:     ", dim=True) + get_toncenter_url())
    click.echo(
        click.style("  Master:  ", dim=True)
        + (os.environ.get("MASTER_ADDRESS") or click.style("not set", fg="yellow"))
    )
    click.echo(click.style("  Config:  ", dim=True) + str(TONMASTER_ENV))
    click.echo()

    click.secho("  Opcodes", fg="cyan")
    for name, op in opcodes.ALL.items():
        click.echo(f"    {name:<18} {op:#010x}")


# ============ Entry Points ============


def main() -> None:
    """tonmaster CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
