"""
Wallet Key Management for tonmaster.

This module handles the mnemonic-derived wallet used to sign and pay for
every outgoing message.

Mnemonics are stored in ~/.tonmaster/.env as MNEMONIC (24 space-separated
words), next to WALLET_VERSION.

Dependencies: tonsdk (wallet contracts + ed25519 signing), python-dotenv
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from tonsdk.contract.wallet import Wallets, WalletVersionEnum


# Default config directory
TONMASTER_DIR = Path.home() / ".tonmaster"
TONMASTER_ENV = TONMASTER_DIR / ".env"

DEFAULT_WALLET_VERSION = "v4r2"
MNEMONIC_WORDS = 24


def _version(name: Optional[str]) -> WalletVersionEnum:
    name = (name or os.environ.get("WALLET_VERSION") or DEFAULT_WALLET_VERSION).lower()
    try:
        return WalletVersionEnum[name]
    except KeyError:
        raise ValueError(f"Unknown wallet version: {name}") from None


def generate_wallet(version: Optional[str] = None, workchain: int = 0) -> tuple[list[str], str]:
    """
    Generate a new wallet.

    Returns:
        Tuple of (mnemonic_words, address)
        - mnemonic_words: 24 words
        - address: user-friendly bounceable address
    """
    mnemonics, _pub_k, _priv_k, wallet = Wallets.create(_version(version), workchain)
    return mnemonics, wallet.address.to_string(True, True, True)


def save_mnemonic(mnemonics: list[str], env_path: Optional[Path] = None) -> Path:
    """
    Save mnemonic to .env file.

    Args:
        mnemonics: Mnemonic words
        env_path: Path to .env file (default: ~/.tonmaster/.env)

    Returns:
        Path to the saved .env file
    """
    env_path = env_path or TONMASTER_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)

    # Read existing .env content or start fresh
    existing = {}
    if env_path.exists():
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                existing[k.strip()] = v.strip()

    existing["MNEMONIC"] = '"' + " ".join(mnemonics) + '"'

    lines = [f"{k}={v}" for k, v in existing.items()]
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    # Set secure permissions on Unix
    if os.name != "nt":
        env_path.chmod(0o600)

    return env_path


def load_mnemonic(env_path: Optional[Path] = None) -> list[str]:
    """
    Load mnemonic from .env file or environment.

    Raises:
        ValueError: If MNEMONIC is missing or malformed
    """
    env_path = env_path or TONMASTER_ENV

    if env_path.exists():
        load_dotenv(env_path, override=True)

    raw = os.environ.get("MNEMONIC")
    if not raw:
        raise ValueError(
            f"MNEMONIC not found. Run 'tonmaster wallet-new' or set "
            f"MNEMONIC in {env_path}"
        )

    words = raw.replace(",", " ").split()
    if len(words) != MNEMONIC_WORDS:
        raise ValueError(f"MNEMONIC must have {MNEMONIC_WORDS} words, got {len(words)}")
    return words


def get_wallet(
    mnemonics: Optional[list[str]] = None,
    version: Optional[str] = None,
    workchain: int = 0,
) -> Any:
    """
    Get a tonsdk wallet contract for a mnemonic.

    Args:
        mnemonics: Mnemonic words. If None, loads from .env.
        version: Wallet version name (default: WALLET_VERSION or v4r2)

    Returns:
        tonsdk wallet contract instance for signing messages
    """
    if mnemonics is None:
        mnemonics = load_mnemonic()
    _m, _pub_k, _priv_k, wallet = Wallets.from_mnemonics(mnemonics, _version(version), workchain)
    return wallet


def get_address(mnemonics: Optional[list[str]] = None, version: Optional[str] = None) -> str:
    """User-friendly bounceable address of the wallet."""
    return get_wallet(mnemonics, version).address.to_string(True, True, True)
