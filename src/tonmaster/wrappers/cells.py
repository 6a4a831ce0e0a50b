"""
Cell helpers shared by the body and content codecs.

tonsdk builds the cells. The readers below decode from raw slice bits:
zero-length coins, MsgAddress in any workchain, and HashmapE dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tonsdk.boc import Cell, begin_cell
from tonsdk.utils import Address


@dataclass(frozen=True)
class StateInit:
    code: Cell
    data: Cell

    def to_cell(self) -> Cell:
        # split_depth:nothing special:nothing code:just data:just library:nothing
        return (
            begin_cell()
            .store_uint(0, 2)
            .store_bit(1)
            .store_ref(self.code)
            .store_bit(1)
            .store_ref(self.data)
            .store_bit(0)
            .end_cell()
        )

    def address(self, workchain: int = 0) -> Address:
        return Address(f"{workchain}:{self.to_cell().bytes_hash().hex()}")


def read_uint(slice_, bits: int) -> int:
    if bits == 0:
        return 0
    return slice_.read_uint(bits)


def read_coins(slice_) -> int:
    length = read_uint(slice_, 4)
    return read_uint(slice_, length * 8)


def read_address(slice_) -> Optional[Address]:
    """Read a MsgAddress; returns None for addr_none."""
    tag = read_uint(slice_, 2)
    if tag == 0:
        return None
    if tag != 2:
        raise ValueError(f"Unsupported address tag: {tag:02b}")
    if slice_.read_bit():
        raise ValueError("Anycast addresses are not supported")
    workchain = read_uint(slice_, 8)
    if workchain >= 128:
        workchain -= 256
    hash_part = read_uint(slice_, 256)
    return Address(f"{workchain}:{hash_part:064x}")


def _read_label(slice_, max_len: int) -> tuple[int, int]:
    """Read an HmLabel, returning (length, value)."""
    if not slice_.read_bit():
        # hml_short$0: unary length then bits
        length = 0
        while slice_.read_bit():
            length += 1
        return length, read_uint(slice_, length)

    len_bits = max_len.bit_length()
    if not slice_.read_bit():
        # hml_long$10
        length = read_uint(slice_, len_bits)
        return length, read_uint(slice_, length)

    # hml_same$11
    bit = slice_.read_bit()
    length = read_uint(slice_, len_bits)
    return length, ((1 << length) - 1) if bit else 0


def _parse_edge(cell: Cell, remaining: int, prefix: int, out: dict[int, Cell]) -> None:
    slice_ = cell.begin_parse()
    length, label = _read_label(slice_, remaining)
    prefix = (prefix << length) | label
    remaining -= length

    if remaining == 0:
        out[prefix] = slice_.read_ref()
        return

    left = slice_.read_ref()
    right = slice_.read_ref()
    _parse_edge(left, remaining - 1, prefix << 1, out)
    _parse_edge(right, remaining - 1, (prefix << 1) | 1, out)


def parse_ref_hashmap(root: Cell, key_bits: int) -> dict[int, Cell]:
    """
    Parse a non-empty Hashmap whose values are stored as references.

    Args:
        root: Root cell of the dictionary
        key_bits: Key length in bits

    Returns:
        Mapping of integer key to the referenced value cell
    """
    out: dict[int, Cell] = {}
    _parse_edge(root, key_bits, 0, out)
    return out
