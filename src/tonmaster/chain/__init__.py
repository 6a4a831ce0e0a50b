"""
Chain - On-chain interaction layer for tonmaster.

Provides the toncenter HTTP client, transport seams (provider + sender),
and compiled code loading for interacting with TON smart contracts.

Uses httpx + tonsdk.
"""
