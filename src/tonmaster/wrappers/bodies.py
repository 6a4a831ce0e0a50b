"""
Message bodies for the Master contract.

Every body starts with `op:uint32 query_id:uint64`; the query id is always
zero. Builders validate parameter shapes before writing any bits. Parsers
decode a body back into a typed record and are used for inspection and by
the test-suite.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from tonsdk.boc import Cell, begin_cell
from tonsdk.utils import Address

from ..utils import AddressLike, check_cell, check_coins, check_uint, raw_address, to_address, ton
from . import opcodes
from .cells import read_address, read_coins, read_uint
from .content import metadata_to_cell, parse_metadata

QUERY_ID = 0

# Forwarded to a freshly deployed item out of the attached value
ITEM_FORWARD_AMOUNT = ton("0.05")


def _header(op: int):
    return begin_cell().store_uint(op, 32).store_uint(QUERY_ID, 64)


def empty_body() -> Cell:
    return begin_cell().end_cell()


def deploy_collection_body(collection_code: Cell, collection_data: Cell) -> Cell:
    check_cell(collection_code, "collection_code")
    check_cell(collection_data, "collection_data")
    return (
        _header(opcodes.DEPLOY_COLLECTION)
        .store_ref(collection_code)
        .store_ref(collection_data)
        .end_cell()
    )


def item_message_cell(
    item_owner_address: AddressLike,
    metadata: Mapping[int, Cell],
    master_address: AddressLike,
) -> Cell:
    """The init message the collection forwards to a new item."""
    owner = to_address(item_owner_address)
    master = to_address(master_address)
    content = metadata_to_cell(metadata)
    return (
        begin_cell()
        .store_address(owner)
        .store_ref(content)
        .store_address(master)
        .end_cell()
    )


def deploy_item_body(
    collection_id: int,
    item_index: int,
    item_owner_address: AddressLike,
    metadata: Mapping[int, Cell],
    master_address: AddressLike,
) -> Cell:
    check_uint(collection_id, 8, "collection_id")
    check_uint(item_index, 64, "item_index")
    item_message = item_message_cell(item_owner_address, metadata, master_address)
    return (
        _header(opcodes.DEPLOY_NFT_ITEM)
        .store_uint(collection_id, 8)
        .store_uint(item_index, 64)
        .store_coins(ITEM_FORWARD_AMOUNT)
        .store_ref(item_message)
        .end_cell()
    )


def transfer_item_body(
    item_address: AddressLike,
    new_owner: AddressLike,
    response_address: AddressLike,
    forward_amount: Optional[int] = None,
) -> Cell:
    item = to_address(item_address)
    owner = to_address(new_owner)
    response = to_address(response_address)
    amount = check_coins(forward_amount or 0, "forward_amount")
    return (
        _header(opcodes.TRANSFER_ITEM)
        .store_address(item)
        .store_address(owner)
        .store_address(response)
        .store_coins(amount)
        .end_cell()
    )


def edit_item_content_body(item_address: AddressLike, metadata: Mapping[int, Cell]) -> Cell:
    item = to_address(item_address)
    content = metadata_to_cell(metadata)
    return (
        _header(opcodes.EDIT_ITEM_CONTENT)
        .store_address(item)
        .store_ref(content)
        .end_cell()
    )


def destroy_sbt_body(item_address: AddressLike) -> Cell:
    item = to_address(item_address)
    return _header(opcodes.DESTROY_SBT_ITEM).store_address(item).end_cell()


def withdraw_body(withdraw_amount: int) -> Cell:
    amount = check_coins(withdraw_amount, "withdraw_amount")
    return _header(opcodes.WITHDRAW_FUNDS).store_coins(amount).end_cell()


def update_dapp_code_body(new_code: Cell) -> Cell:
    check_cell(new_code, "new_code")
    return _header(opcodes.EDIT_DAPP_CODE).store_ref(new_code).end_cell()


# ---------------------------------------------------------------------------
# Parsed bodies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeployCollectionBody:
    query_id: int
    collection_code: Cell
    collection_data: Cell
    op: int = opcodes.DEPLOY_COLLECTION


@dataclass(frozen=True)
class DeployItemBody:
    query_id: int
    collection_id: int
    item_index: int
    forward_amount: int
    item_owner_address: str
    metadata: dict[int, Cell]
    master_address: str
    op: int = opcodes.DEPLOY_NFT_ITEM


@dataclass(frozen=True)
class TransferItemBody:
    query_id: int
    item_address: str
    new_owner: str
    response_address: str
    forward_amount: int
    op: int = opcodes.TRANSFER_ITEM


@dataclass(frozen=True)
class EditItemContentBody:
    query_id: int
    item_address: str
    metadata: dict[int, Cell]
    op: int = opcodes.EDIT_ITEM_CONTENT


@dataclass(frozen=True)
class DestroySbtBody:
    query_id: int
    item_address: str
    op: int = opcodes.DESTROY_SBT_ITEM


@dataclass(frozen=True)
class WithdrawBody:
    query_id: int
    withdraw_amount: int
    op: int = opcodes.WITHDRAW_FUNDS


@dataclass(frozen=True)
class UpdateDappCodeBody:
    query_id: int
    new_code: Cell
    op: int = opcodes.EDIT_DAPP_CODE


ParsedBody = Union[
    DeployCollectionBody,
    DeployItemBody,
    TransferItemBody,
    EditItemContentBody,
    DestroySbtBody,
    WithdrawBody,
    UpdateDappCodeBody,
]


def _open(body: Cell, expected_op: int):
    slice_ = body.begin_parse()
    op = read_uint(slice_, 32)
    if op != expected_op:
        raise ValueError(f"Unexpected opcode {op:#010x}, expected {expected_op:#010x}")
    return slice_, read_uint(slice_, 64)


def _raw(address: Optional[Address]) -> str:
    if address is None:
        raise ValueError("Address field is addr_none")
    return raw_address(address)


def parse_deploy_collection_body(body: Cell) -> DeployCollectionBody:
    slice_, query_id = _open(body, opcodes.DEPLOY_COLLECTION)
    return DeployCollectionBody(query_id, slice_.read_ref(), slice_.read_ref())


def parse_deploy_item_body(body: Cell) -> DeployItemBody:
    slice_, query_id = _open(body, opcodes.DEPLOY_NFT_ITEM)
    collection_id = read_uint(slice_, 8)
    item_index = read_uint(slice_, 64)
    forward_amount = read_coins(slice_)

    item_message = slice_.read_ref().begin_parse()
    owner = read_address(item_message)
    metadata = parse_metadata(item_message.read_ref())
    master = read_address(item_message)

    return DeployItemBody(
        query_id=query_id,
        collection_id=collection_id,
        item_index=item_index,
        forward_amount=forward_amount,
        item_owner_address=_raw(owner),
        metadata=metadata,
        master_address=_raw(master),
    )


def parse_transfer_item_body(body: Cell) -> TransferItemBody:
    slice_, query_id = _open(body, opcodes.TRANSFER_ITEM)
    item = read_address(slice_)
    owner = read_address(slice_)
    response = read_address(slice_)
    return TransferItemBody(query_id, _raw(item), _raw(owner), _raw(response), read_coins(slice_))


def parse_edit_item_content_body(body: Cell) -> EditItemContentBody:
    slice_, query_id = _open(body, opcodes.EDIT_ITEM_CONTENT)
    item = read_address(slice_)
    return EditItemContentBody(query_id, _raw(item), parse_metadata(slice_.read_ref()))


def parse_destroy_sbt_body(body: Cell) -> DestroySbtBody:
    slice_, query_id = _open(body, opcodes.DESTROY_SBT_ITEM)
    return DestroySbtBody(query_id, _raw(read_address(slice_)))


def parse_withdraw_body(body: Cell) -> WithdrawBody:
    slice_, query_id = _open(body, opcodes.WITHDRAW_FUNDS)
    return WithdrawBody(query_id, read_coins(slice_))


def parse_update_dapp_code_body(body: Cell) -> UpdateDappCodeBody:
    slice_, query_id = _open(body, opcodes.EDIT_DAPP_CODE)
    return UpdateDappCodeBody(query_id, slice_.read_ref())


_PARSERS = {
    opcodes.DEPLOY_COLLECTION: parse_deploy_collection_body,
    opcodes.DEPLOY_NFT_ITEM: parse_deploy_item_body,
    opcodes.TRANSFER_ITEM: parse_transfer_item_body,
    opcodes.EDIT_ITEM_CONTENT: parse_edit_item_content_body,
    opcodes.DESTROY_SBT_ITEM: parse_destroy_sbt_body,
    opcodes.WITHDRAW_FUNDS: parse_withdraw_body,
    opcodes.EDIT_DAPP_CODE: parse_update_dapp_code_body,
}


def parse_body(body: Cell) -> ParsedBody:
    """Decode any Master body by its opcode."""
    op = read_uint(body.begin_parse(), 32)
    parser = _PARSERS.get(op)
    if parser is None:
        raise ValueError(f"Unknown opcode {op:#010x}")
    return parser(body)
