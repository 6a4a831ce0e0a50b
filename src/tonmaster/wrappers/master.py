"""
Master - wrapper for the collection-factory contract.

Each `send_*` method builds one message body and makes exactly one
provider call with a fixed attached value. Nothing is validated beyond
parameter shapes; rejections surface from the transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from tonsdk.boc import Cell, begin_cell
from tonsdk.utils import Address

from ..chain.transport import ContractProvider, InternalMessage, Sender, SendMode
from ..utils import AddressLike, check_coins, check_uint, to_address, ton
from . import bodies
from .cells import StateInit

DEPLOY_COLLECTION_VALUE = ton("0.1")
DEPLOY_ITEM_VALUE = ton("0.5")
DEFAULT_VALUE = ton("0.05")


@dataclass(frozen=True)
class MasterConfig:
    owner_address: AddressLike
    next_collection_index: int


def master_config_to_cell(config: MasterConfig) -> Cell:
    """Initial data: owner, next collection index, empty collections dict."""
    owner = to_address(config.owner_address)
    index = check_uint(config.next_collection_index, 8, "next_collection_index")
    return (
        begin_cell()
        .store_address(owner)
        .store_uint(index, 8)
        .store_bit(0)
        .end_cell()
    )


class Master:
    def __init__(self, address: AddressLike, init: Optional[StateInit] = None) -> None:
        self.address: Address = to_address(address)
        self.init = init

    def __repr__(self) -> str:
        return f"Master({self.address.to_string(False)!r})"

    @classmethod
    def create_from_address(cls, address: AddressLike) -> "Master":
        return cls(address)

    @classmethod
    def create_from_config(cls, config: MasterConfig, code: Cell, workchain: int = 0) -> "Master":
        init = StateInit(code=code, data=master_config_to_cell(config))
        return cls(init.address(workchain), init)

    @staticmethod
    def _send(provider: ContractProvider, via: Sender, value: int, body: Cell) -> None:
        provider.internal(
            via,
            InternalMessage(value=value, send_mode=SendMode.PAY_GAS_SEPARATELY, body=body),
        )

    def send_deploy(self, provider: ContractProvider, via: Sender, value: int) -> None:
        self._send(provider, via, check_coins(value, "value"), bodies.empty_body())

    def send_deploy_collection(
        self,
        provider: ContractProvider,
        via: Sender,
        collection_code: Cell,
        collection_data: Cell,
    ) -> None:
        body = bodies.deploy_collection_body(collection_code, collection_data)
        self._send(provider, via, DEPLOY_COLLECTION_VALUE, body)

    def send_deploy_item(
        self,
        provider: ContractProvider,
        via: Sender,
        item_index: int,
        item_owner_address: AddressLike,
        collection_id: int,
        metadata: Mapping[int, Cell],
    ) -> None:
        body = bodies.deploy_item_body(
            collection_id=collection_id,
            item_index=item_index,
            item_owner_address=item_owner_address,
            metadata=metadata,
            master_address=self.address,
        )
        self._send(provider, via, DEPLOY_ITEM_VALUE, body)

    def send_transfer_item(
        self,
        provider: ContractProvider,
        via: Sender,
        new_owner: AddressLike,
        item_address: AddressLike,
        response_address: AddressLike,
        forward_amount: Optional[int] = None,
    ) -> None:
        body = bodies.transfer_item_body(item_address, new_owner, response_address, forward_amount)
        self._send(provider, via, DEFAULT_VALUE, body)

    def send_edit_item_content(
        self,
        provider: ContractProvider,
        via: Sender,
        item_address: AddressLike,
        metadata: Mapping[int, Cell],
    ) -> None:
        body = bodies.edit_item_content_body(item_address, metadata)
        self._send(provider, via, DEFAULT_VALUE, body)

    def send_destroy_sbt(self, provider: ContractProvider, via: Sender, item_address: AddressLike) -> None:
        self._send(provider, via, DEFAULT_VALUE, bodies.destroy_sbt_body(item_address))

    def send_withdraw(self, provider: ContractProvider, via: Sender, withdraw_amount: int) -> None:
        self._send(provider, via, DEFAULT_VALUE, bodies.withdraw_body(withdraw_amount))

    def send_update_dapp_code(self, provider: ContractProvider, via: Sender, new_code: Cell) -> None:
        self._send(provider, via, DEFAULT_VALUE, bodies.update_dapp_code_body(new_code))
