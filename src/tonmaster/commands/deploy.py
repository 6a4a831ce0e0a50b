"""
Deploy - Create the Master contract, its sub-collections and items.

Flow for a fresh Master:
1. Load Master code from build/Master.compiled.json
2. Derive the address from (owner, next collection index)
3. Send an empty-body message carrying the StateInit
"""

from __future__ import annotations

import sys

import click

from ..chain.code import load_code, master_code
from ..keys.wallet import get_address
from ..utils import cell_from_base64, format_ton
from ..wrappers.master import DEPLOY_COLLECTION_VALUE, DEPLOY_ITEM_VALUE, Master, MasterConfig
from .common import TON_AMOUNT, api_options, dispatch, master_option, parse_attrs, resolve_master


@click.command()
@click.option("--owner", default=None, help="Owner address (default: your wallet)")
@click.option("--next-index", default=0, type=int, help="Next collection index")
@click.option("--value", "nano", default="0.05", type=TON_AMOUNT, help="TON attached to the deploy message")
@api_options
def deploy(owner: str, next_index: int, nano: int, api_url: str, api_key: str) -> None:
    """Deploy a new Master contract owned by OWNER."""
    click.echo("=== tonmaster Deploy ===")
    click.echo("")

    try:
        owner = owner or get_address()
        master = Master.create_from_config(MasterConfig(owner, next_index), master_code())
    except Exception as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"  Value: {format_ton(nano)}")
    dispatch(
        "Deploy",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_deploy(provider, via, nano),
    )
    click.echo(f"  Address: {master.address.to_string(True, True, True)}")
    click.echo(click.style("  Hint: ", dim=True) + "set MASTER_ADDRESS to this address")


@click.command("deploy-collection")
@master_option
@click.option("--code", "code_name", required=True, help="Compiled collection contract name")
@click.option("--data", "data_b64", required=True, help="Collection data cell (base64 BoC)")
@api_options
def deploy_collection(
    master_address: str,
    code_name: str,
    data_b64: str,
    api_url: str,
    api_key: str,
) -> None:
    """Deploy a sub-collection through the Master."""
    click.echo("=== tonmaster Deploy Collection ===")
    click.echo("")

    master = resolve_master(master_address)
    try:
        code = load_code(code_name)
        data = cell_from_base64(data_b64)
    except Exception as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"  Value: {format_ton(DEPLOY_COLLECTION_VALUE)}")
    dispatch(
        "Deploy collection",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_deploy_collection(provider, via, code, data),
    )


@click.command("deploy-item")
@master_option
@click.option("--collection-id", required=True, type=int, help="Collection index (uint8)")
@click.option("--index", "item_index", required=True, type=int, help="Item index (uint64)")
@click.option("--owner", required=True, help="Item owner address")
@click.option("--attr", "attrs", multiple=True, help="Metadata attribute as name=value")
@api_options
def deploy_item(
    master_address: str,
    collection_id: int,
    item_index: int,
    owner: str,
    attrs: tuple[str, ...],
    api_url: str,
    api_key: str,
) -> None:
    """
    Deploy an NFT/SBT item into a collection.

    \b
    Examples:
      tonmaster deploy-item --collection-id 0 --index 7 --owner EQ... \\
          --attr name="Badge #7" --attr image=https://example.org/7.png
    """
    click.echo("=== tonmaster Deploy Item ===")
    click.echo("")

    master = resolve_master(master_address)
    metadata = parse_attrs(attrs)

    click.echo(f"  Collection: {collection_id}")
    click.echo(f"  Index: {item_index}")
    click.echo(f"  Owner: {owner}")
    click.echo(f"  Attributes: {len(metadata)}")
    click.echo(f"  Value: {format_ton(DEPLOY_ITEM_VALUE)}")
    dispatch(
        "Deploy item",
        master,
        api_url,
        api_key,
        lambda m, provider, via: m.send_deploy_item(
            provider,
            via,
            item_index=item_index,
            item_owner_address=owner,
            collection_id=collection_id,
            metadata=metadata,
        ),
    )
