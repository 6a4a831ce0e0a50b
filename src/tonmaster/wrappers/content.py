"""
Item content codec.

NFT/SBT item content is a HashmapE(256) from attribute key to a referenced
value cell. For TEP-64 on-chain metadata the key is sha256(attribute name)
and the value is a snake-encoded string prefixed with 0x00.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

from tonsdk.boc import Cell, begin_cell, begin_dict

from ..utils import check_cell, check_uint, sha256_int
from .cells import parse_ref_hashmap

KEY_BITS = 256

# Bytes per cell: 1023 bits rounds down to 127 bytes
_CELL_BYTES = 127
SNAKE_PREFIX = 0x00

ONCHAIN_ATTRIBUTES = (
    "uri",
    "name",
    "description",
    "image",
    "image_data",
    "symbol",
    "decimals",
    "amount_style",
    "render_type",
)


def metadata_to_dict_cell(metadata: Mapping[int, Cell]) -> Optional[Cell]:
    """Serialize a metadata mapping to a Hashmap root, or None if empty."""
    if not metadata:
        return None

    builder = begin_dict(KEY_BITS)
    for key in sorted(metadata):
        check_uint(key, KEY_BITS, "metadata key")
        value = check_cell(metadata[key], f"metadata[{key:#x}]")
        builder.store_cell(key, begin_cell().store_ref(value).end_cell())
    return builder.end_dict()


def metadata_to_cell(metadata: Mapping[int, Cell]) -> Cell:
    """Build the content cell: a single `Maybe ^Hashmap` field."""
    root = metadata_to_dict_cell(metadata)
    builder = begin_cell()
    if root is None:
        builder.store_bit(0)
    else:
        builder.store_bit(1).store_ref(root)
    return builder.end_cell()


def parse_metadata(content: Cell) -> dict[int, Cell]:
    """Inverse of metadata_to_cell."""
    slice_ = content.begin_parse()
    if not slice_.read_bit():
        return {}
    return parse_ref_hashmap(slice_.read_ref(), KEY_BITS)


def snake_cell(data: bytes, prefix: Optional[int] = SNAKE_PREFIX) -> Cell:
    """Encode bytes as a snake cell chain, optionally with a prefix byte."""
    payload = bytes([prefix]) + data if prefix is not None else data
    chunks = [payload[i:i + _CELL_BYTES] for i in range(0, len(payload), _CELL_BYTES)] or [b""]

    tail: Optional[Cell] = None
    for chunk in reversed(chunks):
        builder = begin_cell().store_bytes(chunk)
        if tail is not None:
            builder.store_ref(tail)
        tail = builder.end_cell()
    return tail


def read_snake(cell: Cell, prefix: Optional[int] = SNAKE_PREFIX) -> bytes:
    out = bytearray()
    current: Optional[Cell] = cell
    while current is not None:
        out += current.bits.array[: current.bits.cursor // 8]
        current = current.refs[0] if current.refs else None

    if prefix is not None:
        if not out or out[0] != prefix:
            raise ValueError(f"Snake data does not start with prefix {prefix:#04x}")
        del out[0]
    return bytes(out)


def build_onchain_metadata(attributes: Mapping[str, Union[str, bytes]]) -> dict[int, Cell]:
    """
    Build a metadata dictionary from named TEP-64 attributes.

    Args:
        attributes: Attribute name to value (str is UTF-8 encoded)

    Returns:
        Mapping of sha256(name) to snake-encoded value cell
    """
    metadata: dict[int, Cell] = {}
    for name, value in attributes.items():
        raw = value.encode("utf-8") if isinstance(value, str) else value
        metadata[sha256_int(name)] = snake_cell(raw)
    return metadata


def parse_onchain_metadata(
    metadata: Mapping[int, Cell],
    names: tuple[str, ...] = ONCHAIN_ATTRIBUTES,
) -> dict[str, str]:
    """Decode the attributes in `names` that are present in `metadata`."""
    result: dict[str, str] = {}
    for name in names:
        cell = metadata.get(sha256_int(name))
        if cell is not None:
            result[name] = read_snake(cell).decode("utf-8")
    return result
