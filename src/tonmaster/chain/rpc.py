"""
HTTP API client for toncenter (v2).

Lightweight alternative to a full lite-client: uses httpx for HTTP and
tonsdk for BoC serialization. Supports sending messages, account state
and balance queries, and wallet seqno lookup.
"""

from __future__ import annotations

import base64
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

# Default endpoint (testnet)
DEFAULT_TONCENTER_URL = "https://testnet.toncenter.com/api/v2"


class RPCError(RuntimeError):
    """The API answered with `ok: false`."""

    def __init__(self, method: str, message: str, code: Optional[int] = None):
        self.method = method
        self.code = code
        super().__init__(f"{method} failed ({code}): {message}" if code else f"{method} failed: {message}")


def get_toncenter_url() -> str:
    """Get the API URL from environment or default."""
    return os.environ.get("TONCENTER_URL", DEFAULT_TONCENTER_URL)


def get_api_key() -> Optional[str]:
    return os.environ.get("TONCENTER_API_KEY") or None


@dataclass
class ToncenterClient:
    """
    Minimal toncenter v2 client.

    Args:
        base_url: API root, e.g. https://toncenter.com/api/v2
        api_key: Optional key sent as X-API-Key
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    base_url: str = ""
    api_key: Optional[str] = None
    timeout: float = 30
    transport: Optional[httpx.BaseTransport] = None

    def __post_init__(self) -> None:
        if not self.base_url:
            self.base_url = get_toncenter_url()
        if self.api_key is None:
            self.api_key = get_api_key()
        self.base_url = self.base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {"X-API-Key": self.api_key} if self.api_key else {}

    def _call(
        self,
        method: str,
        params: Optional[dict] = None,
        payload: Optional[dict] = None,
    ) -> Any:
        """
        Make an API call.

        GET with query params, or POST with a JSON payload when given.

        Returns:
            Result field from the API response

        Raises:
            RPCError: If the API reports failure
        """
        url = f"{self.base_url}/{method}"
        logger.debug("toncenter %s params=%s", method, params or payload)

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            if payload is not None:
                response = client.post(url, json=payload, headers=self._headers())
            else:
                response = client.get(url, params=params, headers=self._headers())

        try:
            data = response.json()
        except ValueError:
            response.raise_for_status()
            raise

        if not data.get("ok", False):
            raise RPCError(method, str(data.get("error", "unknown error")), data.get("code"))

        return data.get("result")

    def send_boc(self, boc: bytes) -> Any:
        """
        Send a serialized external message.

        Args:
            boc: Bag-of-cells bytes of the signed message
        """
        encoded = base64.b64encode(boc).decode("ascii")
        return self._call("sendBoc", payload={"boc": encoded})

    def get_address_state(self, address: str) -> str:
        """Returns "active", "uninitialized" or "frozen"."""
        return self._call("getAddressState", params={"address": address})

    def get_balance(self, address: str) -> int:
        """Balance in nanotons."""
        return int(self._call("getAddressBalance", params={"address": address}))

    def get_seqno(self, address: str) -> int:
        """Current wallet seqno; 0 for an undeployed wallet."""
        info = self._call("getWalletInformation", params={"address": address})
        return int(info.get("seqno") or 0)
