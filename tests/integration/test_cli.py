"""
CLI integration tests using Click's test runner.

Tests verify that the CLI commands work end-to-end via the Click
CliRunner, without requiring network access: the provider and sender
are replaced with recording doubles.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from tonsdk.boc import begin_cell

from tonmaster.cli import cli
from tonmaster.keys.wallet import generate_wallet, get_address, save_mnemonic
from tonmaster.utils import boc_to_base64, raw_address, ton
from tonmaster.wrappers import opcodes
from tonmaster.wrappers.bodies import (
    deploy_item_body,
    parse_deploy_item_body,
    parse_transfer_item_body,
    parse_update_dapp_code_body,
    parse_withdraw_body,
    withdraw_body,
)
from tonmaster.wrappers.content import build_onchain_metadata, parse_onchain_metadata
from tonmaster.wrappers.master import Master, MasterConfig

from ..conftest import RecordingProvider, RecordingSender

MASTER_RAW = "0:" + "cd" * 32
OWNER_RAW = "0:" + "aa" * 32
ITEM_RAW = "0:" + "bb" * 32


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(scope="module")
def mnemonic() -> list[str]:
    words, _address = generate_wallet()
    return words


@pytest.fixture()
def tonmaster_home(tmp_path: Path):
    """Point the config file at a temporary ~/.tonmaster/.env."""
    env_path = tmp_path / ".tonmaster" / ".env"
    with patch("tonmaster.keys.wallet.TONMASTER_ENV", env_path):
        yield env_path


@pytest.fixture()
def wallet_env(tonmaster_home: Path, mnemonic: list[str]):
    with patch.dict(os.environ, {"MNEMONIC": " ".join(mnemonic)}):
        yield mnemonic


@pytest.fixture()
def recorder():
    """Replace the network transport used by the send commands."""
    provider = RecordingProvider()
    sender = RecordingSender()
    with patch("tonmaster.commands.common.ToncenterProvider", return_value=provider), \
            patch("tonmaster.commands.common.load_sender", return_value=sender):
        yield provider, sender


@pytest.fixture()
def build_dir(tmp_path: Path) -> Path:
    out = tmp_path / "build"
    out.mkdir()
    code = begin_cell().store_uint(0xC0DE, 16).end_cell()
    for name in ("Master", "Collection"):
        (out / f"{name}.compiled.json").write_text(
            json.dumps({"hex": code.to_boc(False).hex()}), encoding="utf-8"
        )
    return out


class TestVersionAndInfo:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_info_lists_opcodes(self, runner: CliRunner, tonmaster_home: Path) -> None:
        with patch.dict(os.environ, {"MNEMONIC": ""}):
            result = runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "not initialized" in result.output
        assert "transfer_item" in result.output


class TestWallet:
    def test_whoami(self, runner: CliRunner, wallet_env: list[str]) -> None:
        result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert f"Address: {get_address(wallet_env)}" in result.output

    def test_whoami_without_wallet(self, runner: CliRunner, tonmaster_home: Path) -> None:
        with patch.dict(os.environ, {"MNEMONIC": ""}):
            result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 1
        assert "No wallet found" in result.output

    def test_saved_mnemonic_is_loaded(self, runner: CliRunner, tonmaster_home: Path, mnemonic: list[str]) -> None:
        save_mnemonic(mnemonic, tonmaster_home)
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("MNEMONIC", None)
            result = runner.invoke(cli, ["whoami"])
        assert result.exit_code == 0
        assert get_address(mnemonic) in result.output


class TestAddress:
    def test_matches_library(self, runner: CliRunner, build_dir: Path) -> None:
        result = runner.invoke(
            cli, ["address", "--owner", OWNER_RAW, "--next-index", "2", "--build-dir", str(build_dir)]
        )
        assert result.exit_code == 0, result.output

        code = begin_cell().store_uint(0xC0DE, 16).end_cell()
        expected = Master.create_from_config(MasterConfig(OWNER_RAW, 2), code)
        assert raw_address(expected.address) in result.output

    def test_missing_build(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["address", "--owner", OWNER_RAW, "--build-dir", str(tmp_path / "nope")]
        )
        assert result.exit_code == 1
        assert "ERROR" in result.output


class TestSendCommands:
    def test_requires_master(self, runner: CliRunner, recorder) -> None:
        with patch.dict(os.environ, {"MASTER_ADDRESS": ""}):
            result = runner.invoke(cli, ["withdraw", "--amount", "1"])
        assert result.exit_code != 0
        assert "Master address not specified" in result.output

    def test_withdraw(self, runner: CliRunner, recorder) -> None:
        provider, _sender = recorder
        result = runner.invoke(cli, ["withdraw", "--master", MASTER_RAW, "--amount", "1.5"])
        assert result.exit_code == 0, result.output
        assert "SUCCESS" in result.output

        message = provider.last
        assert message.value == ton("0.05")
        assert parse_withdraw_body(message.body).withdraw_amount == ton("1.5")

    def test_withdraw_rejects_zero(self, runner: CliRunner, recorder) -> None:
        provider, _sender = recorder
        result = runner.invoke(cli, ["withdraw", "--master", MASTER_RAW, "--amount", "0"])
        assert result.exit_code == 1
        assert provider.messages == []

    def test_deploy_item_with_attributes(self, runner: CliRunner, recorder) -> None:
        provider, _sender = recorder
        result = runner.invoke(
            cli,
            [
                "deploy-item",
                "--master", MASTER_RAW,
                "--collection-id", "3",
                "--index", "11",
                "--owner", OWNER_RAW,
                "--attr", "name=Badge #11",
                "--attr", "image=https://example.org/11.png",
            ],
        )
        assert result.exit_code == 0, result.output

        parsed = parse_deploy_item_body(provider.last.body)
        assert parsed.collection_id == 3
        assert parsed.item_index == 11
        assert parsed.master_address == MASTER_RAW
        assert parse_onchain_metadata(parsed.metadata) == {
            "name": "Badge #11",
            "image": "https://example.org/11.png",
        }

    def test_bad_attribute(self, runner: CliRunner, recorder) -> None:
        result = runner.invoke(
            cli,
            ["edit-content", "--master", MASTER_RAW, "--item", ITEM_RAW, "--attr", "no-equals"],
        )
        assert result.exit_code == 2
        assert "name=value" in result.output

    def test_transfer_uses_explicit_response(self, runner: CliRunner, recorder) -> None:
        provider, _sender = recorder
        result = runner.invoke(
            cli,
            [
                "transfer-item",
                "--master", MASTER_RAW,
                "--item", ITEM_RAW,
                "--to", OWNER_RAW,
                "--response", MASTER_RAW,
                "--forward", "0.01",
            ],
        )
        assert result.exit_code == 0, result.output

        parsed = parse_transfer_item_body(provider.last.body)
        assert parsed.item_address == ITEM_RAW
        assert parsed.new_owner == OWNER_RAW
        assert parsed.response_address == MASTER_RAW
        assert parsed.forward_amount == ton("0.01")

    def test_transport_failure_exits(self, runner: CliRunner, recorder) -> None:
        provider, _sender = recorder
        with patch.object(provider, "internal", side_effect=RuntimeError("sendBoc failed: boom")):
            result = runner.invoke(cli, ["destroy-sbt", "--master", MASTER_RAW, "--item", ITEM_RAW])
        assert result.exit_code == 1
        assert "boom" in result.output

    def test_deploy_collection(self, runner: CliRunner, recorder, build_dir: Path) -> None:
        provider, _sender = recorder
        data = begin_cell().store_uint(1, 8).end_cell()
        with patch.dict(os.environ, {"CONTRACTS_BUILD_DIR": str(build_dir)}):
            result = runner.invoke(
                cli,
                [
                    "deploy-collection",
                    "--master", MASTER_RAW,
                    "--code", "Collection",
                    "--data", boc_to_base64(data),
                ],
            )
        assert result.exit_code == 0, result.output
        assert provider.last.value == ton("0.1")

    @pytest.mark.parametrize(
        "command",
        [
            ["withdraw", "--master", MASTER_RAW, "--amount", "abc"],
            ["transfer-item", "--master", MASTER_RAW, "--item", ITEM_RAW, "--to", OWNER_RAW,
             "--response", MASTER_RAW, "--forward", "1.2.3"],
            ["deploy", "--owner", OWNER_RAW, "--value", "lots"],
        ],
    )
    def test_malformed_amount_is_usage_error(self, runner: CliRunner, recorder, command: list[str]) -> None:
        provider, _sender = recorder
        result = runner.invoke(cli, command)
        assert result.exit_code == 2
        assert "not a valid TON amount" in result.output
        assert not isinstance(result.exception, ArithmeticError)
        assert provider.messages == []

    def test_deploy(self, runner: CliRunner, recorder, build_dir: Path) -> None:
        provider, _sender = recorder
        with patch.dict(os.environ, {"CONTRACTS_BUILD_DIR": str(build_dir)}), \
                patch("tonmaster.commands.common.ToncenterProvider", return_value=provider) as factory:
            result = runner.invoke(cli, ["deploy", "--owner", OWNER_RAW, "--next-index", "4", "--value", "0.2"])
        assert result.exit_code == 0, result.output

        code = begin_cell().store_uint(0xC0DE, 16).end_cell()
        expected = Master.create_from_config(MasterConfig(OWNER_RAW, 4), code)
        message = provider.last
        assert message.value == ton("0.2")
        assert message.body.bytes_hash() == begin_cell().end_cell().bytes_hash()

        kwargs = factory.call_args.kwargs
        assert raw_address(kwargs["address"]) == raw_address(expected.address)
        assert kwargs["init"].to_cell().bytes_hash() == expected.init.to_cell().bytes_hash()
        assert expected.address.to_string(True, True, True) in result.output

    def test_update_code(self, runner: CliRunner, recorder, build_dir: Path) -> None:
        provider, _sender = recorder
        with patch.dict(os.environ, {"CONTRACTS_BUILD_DIR": str(build_dir)}):
            result = runner.invoke(cli, ["update-code", "--master", MASTER_RAW, "--code", "Master"])
        assert result.exit_code == 0, result.output

        code = begin_cell().store_uint(0xC0DE, 16).end_cell()
        parsed = parse_update_dapp_code_body(provider.last.body)
        assert parsed.op == opcodes.EDIT_DAPP_CODE
        assert parsed.new_code.bytes_hash() == code.bytes_hash()
        assert provider.last.value == ton("0.05")
        assert code.bytes_hash().hex() in result.output


class TestDecode:
    def test_withdraw(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["decode", boc_to_base64(withdraw_body(ton("1.5")))])
        assert result.exit_code == 0, result.output
        assert "WithdrawBody" in result.output
        assert f"{opcodes.WITHDRAW_FUNDS:#010x}" in result.output
        assert "1.5" in result.output

    def test_deploy_item_metadata(self, runner: CliRunner) -> None:
        body = deploy_item_body(0, 5, OWNER_RAW, build_onchain_metadata({"name": "Five"}), MASTER_RAW)
        result = runner.invoke(cli, ["decode", boc_to_base64(body)])
        assert result.exit_code == 0, result.output
        assert "name = Five" in result.output
        assert OWNER_RAW in result.output

    def test_garbage(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["decode", boc_to_base64(begin_cell().store_uint(0, 8).end_cell())])
        assert result.exit_code == 1
        assert "Cannot decode" in result.output
