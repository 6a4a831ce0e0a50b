"""
Item - Transfer, edit and destroy NFT/SBT items through the Master.
"""

from __future__ import annotations

from typing import Optional

import click

from ..keys.wallet import get_address
from .common import TON_AMOUNT, api_options, dispatch, master_option, parse_attrs, resolve_master


@click.command("transfer-item")
@master_option
@click.option("--item", "item_address", required=True, help="Item address")
@click.option("--to", "new_owner", required=True, help="New owner address")
@click.option("--response", "response_address", default=None,
              help="Address receiving excesses (default: your wallet)")
@click.option("--forward", "forward_amount", default="0", type=TON_AMOUNT, help="TON forwarded to the new owner")
@api_options
def transfer_item(
    master_address: str,
    item_address: str,
    new_owner: str,
    response_address: Optional[str],
    forward_amount: int,
    api_url: str,
    api_key: str,
) -> None:
    """Transfer an item to a new owner."""
    click.echo("=== tonmaster Transfer Item ===")
    click.echo("")

    master = resolve_master(master_address)

    click.echo(f"  Item: {item_address}")
    click.echo(f"  To: {new_owner}")
    dispatch(
        "Transfer",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_transfer_item(
            provider,
            via,
            new_owner=new_owner,
            item_address=item_address,
            response_address=response_address or get_address(),
            forward_amount=forward_amount,
        ),
    )


@click.command("edit-content")
@master_option
@click.option("--item", "item_address", required=True, help="Item address")
@click.option("--attr", "attrs", multiple=True, help="Metadata attribute as name=value")
@api_options
def edit_content(
    master_address: str,
    item_address: str,
    attrs: tuple[str, ...],
    api_url: str,
    api_key: str,
) -> None:
    """Replace the content of an item."""
    click.echo("=== tonmaster Edit Content ===")
    click.echo("")

    master = resolve_master(master_address)
    metadata = parse_attrs(attrs)

    click.echo(f"  Item: {item_address}")
    click.echo(f"  Attributes: {len(metadata)}")
    dispatch(
        "Edit content",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_edit_item_content(provider, via, item_address, metadata),
    )


@click.command("destroy-sbt")
@master_option
@click.option("--item", "item_address", required=True, help="SBT item address")
@api_options
def destroy_sbt(master_address: str, item_address: str, api_url: str, api_key: str) -> None:
    """Destroy a soulbound item."""
    click.echo("=== tonmaster Destroy SBT ===")
    click.echo("")

    master = resolve_master(master_address)
    click.echo(f"  Item: {item_address}")
    dispatch(
        "Destroy",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_destroy_sbt(provider, via, item_address),
    )
