"""Shared option handling for the send commands."""

from __future__ import annotations

import sys
from typing import Callable, Optional

import click
from tonsdk.boc import Cell

from ..chain.rpc import DEFAULT_TONCENTER_URL, ToncenterClient
from ..chain.transport import ToncenterProvider, WalletSender
from ..keys.wallet import TONMASTER_ENV, get_wallet, load_mnemonic
from ..utils import ton
from ..wrappers.content import build_onchain_metadata
from ..wrappers.master import Master


class TonAmount(click.ParamType):
    """A TON amount such as `1.5`, converted to nanotons."""

    name = "ton"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return ton(value)
        except (ArithmeticError, ValueError) as exc:
            self.fail(f"{value!r} is not a valid TON amount ({exc.__class__.__name__})", param, ctx)


TON_AMOUNT = TonAmount()


def api_options(func: Callable) -> Callable:
    """Attach --api-url / --api-key options."""
    func = click.option(
        "--api-key",
        envvar="TONCENTER_API_KEY",
        default=None,
        help="toncenter API key",
    )(func)
    func = click.option(
        "--api-url",
        envvar="TONCENTER_URL",
        default=DEFAULT_TONCENTER_URL,
        help="toncenter v2 API URL",
    )(func)
    return func


def master_option(func: Callable) -> Callable:
    return click.option(
        "--master",
        "master_address",
        envvar="MASTER_ADDRESS",
        default=None,
        help="Master contract address (default: MASTER_ADDRESS)",
    )(func)


def resolve_master(master_address: Optional[str]) -> Master:
    if not master_address:
        raise click.ClickException(
            f"Master address not specified. Use --master or set MASTER_ADDRESS in {TONMASTER_ENV}."
        )
    try:
        return Master.create_from_address(master_address)
    except Exception as exc:
        raise click.ClickException(f"Invalid master address: {exc}") from exc


def load_sender(client: ToncenterClient) -> WalletSender:
    try:
        wallet = get_wallet(load_mnemonic())
    except (ValueError, FileNotFoundError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        click.echo("Run 'tonmaster wallet-new' first.")
        sys.exit(1)
    return WalletSender(wallet=wallet, client=client)


def parse_attrs(attrs: tuple[str, ...]) -> dict[int, Cell]:
    """Turn `name=value` pairs into an on-chain metadata dictionary."""
    parsed: dict[str, str] = {}
    for item in attrs:
        if "=" not in item:
            raise click.BadParameter(f"Expected name=value, got {item!r}", param_hint="--attr")
        name, value = item.split("=", 1)
        parsed[name.strip()] = value
    return build_onchain_metadata(parsed)


def dispatch(
    label: str,
    master: Master,
    api_url: str,
    api_key: Optional[str],
    action: Callable[[Master, ToncenterProvider, WalletSender], None],
) -> None:
    """Open a provider for `master`, run one send action and report."""
    client = ToncenterClient(base_url=api_url, api_key=api_key)
    sender = load_sender(client)
    provider = ToncenterProvider(address=master.address, client=client, init=master.init)

    click.echo(f"  Sender: {sender.address.to_string(True, True, True)}")
    click.echo(f"  Master: {master.address.to_string(True, True, True)}")
    click.echo("")

    try:
        action(master, provider, sender)
    except Exception as exc:
        click.secho(f"{label} failed: {exc}", fg="red")
        sys.exit(1)

    click.secho(f"SUCCESS: {label} message sent", fg="green")
