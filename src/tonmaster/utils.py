from __future__ import annotations

import base64
import hashlib
from decimal import Decimal
from typing import Union

from tonsdk.boc import Cell
from tonsdk.utils import Address, from_nano, to_nano

AddressLike = Union[Address, str]


def sha256_int(data: Union[str, bytes]) -> int:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return int.from_bytes(hashlib.sha256(data).digest(), "big")


def boc_to_base64(cell: Cell) -> str:
    return base64.b64encode(cell.to_boc(False)).decode("ascii")


def cell_from_base64(value: str) -> Cell:
    return Cell.one_from_boc(base64.b64decode(value))


def cell_from_hex(value: str) -> Cell:
    return Cell.one_from_boc(bytes.fromhex(value.removeprefix("0x")))


def to_address(value: AddressLike) -> Address:
    if isinstance(value, Address):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Expected address string, got {type(value).__name__}")
    return Address(value)


def raw_address(value: AddressLike) -> str:
    """Return the `workchain:hex` form, used for comparisons."""
    return to_address(value).to_string(False)


def friendly_address(value: AddressLike, bounceable: bool = True, testnet: bool = False) -> str:
    return to_address(value).to_string(True, True, bounceable, testnet)


def check_uint(value: int, bits: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0 or value >= 1 << bits:
        raise ValueError(f"{name} does not fit in uint{bits}: {value}")
    return value


def check_coins(value: int, name: str) -> int:
    # VarUInteger 16: up to 15 bytes of value
    return check_uint(value, 120, name)


def check_cell(value: Cell, name: str) -> Cell:
    if not isinstance(value, Cell):
        raise TypeError(f"{name} must be a Cell, got {type(value).__name__}")
    return value


def ton(amount: Union[str, int, Decimal]) -> int:
    """Convert a TON amount to nanotons."""
    return to_nano(amount, "ton")


def format_ton(nano: int) -> str:
    return f"{from_nano(nano, 'ton')} TON"
