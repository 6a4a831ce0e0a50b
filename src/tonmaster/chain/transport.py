"""
Transport - deliver internal messages to contracts.

`ContractProvider` and `Sender` are the two seams the contract wrappers
depend on. A provider is bound to one contract address; a sender signs and
pays for the outgoing message. The toncenter-backed implementations send
through a tonsdk wallet; tests substitute a recording double.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntFlag
from typing import Any, Optional, Protocol

from tonsdk.boc import Cell
from tonsdk.utils import Address

from ..utils import friendly_address, to_address
from ..wrappers.cells import StateInit
from .rpc import ToncenterClient

logger = logging.getLogger(__name__)


class SendMode(IntFlag):
    CARRY_ALL_REMAINING_BALANCE = 128
    CARRY_ALL_REMAINING_INCOMING_VALUE = 64
    DESTROY_ACCOUNT_IF_ZERO = 32
    PAY_GAS_SEPARATELY = 1
    IGNORE_ERRORS = 2
    NONE = 0


@dataclass(frozen=True)
class InternalMessage:
    """What a wrapper asks a provider to deliver."""

    value: int
    send_mode: SendMode
    body: Cell
    bounce: bool = True


@dataclass(frozen=True)
class SenderArguments:
    """A fully addressed message handed to a sender."""

    to: Address
    value: int
    send_mode: SendMode
    body: Cell
    bounce: bool = True
    init: Optional[StateInit] = None


class Sender(Protocol):
    address: Optional[Address]

    def send(self, args: SenderArguments) -> None:
        ...


class ContractProvider(Protocol):
    def internal(self, via: Sender, message: InternalMessage) -> None:
        ...


@dataclass
class WalletSender:
    """
    Sign with a tonsdk wallet contract and post through toncenter.

    Args:
        wallet: tonsdk wallet (from Wallets.from_mnemonics / Wallets.create)
        client: API client used for seqno lookup and sendBoc
    """

    wallet: Any
    client: ToncenterClient

    @property
    def address(self) -> Address:
        return self.wallet.address

    def send(self, args: SenderArguments) -> None:
        sender = friendly_address(self.wallet.address)
        seqno = self.client.get_seqno(sender)

        query = self.wallet.create_transfer_message(
            to_addr=friendly_address(args.to, bounceable=args.bounce),
            amount=args.value,
            seqno=seqno,
            payload=args.body,
            send_mode=int(args.send_mode),
            state_init=args.init.to_cell() if args.init is not None else None,
        )

        logger.debug(
            "Sending %d nanoton from %s to %s (mode=%d, seqno=%d)",
            args.value,
            sender,
            friendly_address(args.to),
            int(args.send_mode),
            seqno,
        )
        self.client.send_boc(query["message"].to_boc(False))


@dataclass
class ToncenterProvider:
    """
    Provider bound to one contract address.

    Attaches the StateInit when the target account is not yet active, so
    the first message deploys the contract.
    """

    address: Address
    client: ToncenterClient
    init: Optional[StateInit] = None

    def __post_init__(self) -> None:
        self.address = to_address(self.address)

    def state(self) -> str:
        return self.client.get_address_state(friendly_address(self.address))

    def internal(self, via: Sender, message: InternalMessage) -> None:
        init = None
        if self.init is not None and self.state() != "active":
            init = self.init

        via.send(
            SenderArguments(
                to=self.address,
                value=message.value,
                send_mode=message.send_mode,
                body=message.body,
                bounce=message.bounce,
                init=init,
            )
        )
