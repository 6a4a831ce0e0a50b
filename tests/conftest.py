"""Shared fixtures: recording transport doubles and sample cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest
from tonsdk.boc import Cell, begin_cell
from tonsdk.utils import Address

from tonmaster.chain.transport import InternalMessage, SenderArguments


def make_address(byte: int, workchain: int = 0) -> Address:
    return Address(f"{workchain}:{bytes([byte]).hex() * 32}")


@dataclass
class RecordingSender:
    """Sender double that keeps every SenderArguments it is given."""

    address: Optional[Address] = field(default_factory=lambda: make_address(0x11))
    sent: list[SenderArguments] = field(default_factory=list)

    def send(self, args: SenderArguments) -> None:
        self.sent.append(args)


@dataclass
class RecordingProvider:
    """Provider double that records (sender, message) pairs."""

    messages: list[tuple[object, InternalMessage]] = field(default_factory=list)

    def internal(self, via, message: InternalMessage) -> None:
        self.messages.append((via, message))

    @property
    def last(self) -> InternalMessage:
        return self.messages[-1][1]


@pytest.fixture()
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture()
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture()
def owner() -> Address:
    return make_address(0xAA)


@pytest.fixture()
def item_address() -> Address:
    return make_address(0xBB)


@pytest.fixture()
def code_cell() -> Cell:
    return begin_cell().store_uint(0xDEADBEEF, 32).end_cell()


@pytest.fixture()
def data_cell() -> Cell:
    return begin_cell().store_uint(42, 16).end_cell()
