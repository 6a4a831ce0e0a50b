"""Wallet keys for signing outgoing messages."""
