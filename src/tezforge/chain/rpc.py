"""
Node RPC transport.

Thin async wrapper over ``httpx`` for the handful of node routes tezforge
uses. Reads raise ChainQueryError, writes raise NodeRequestError. Nothing is
retried here: a stale branch or counter makes a resent operation invalid, so
retrying is left to the caller, from the top of the pipeline.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from tezforge.config import NodeConfig
from tezforge.errors import ChainQueryError, NodeRequestError
from tezforge.utils.logging import get_logger, truncate_for_logging

_logger = get_logger(__name__)


class NodeRpcClient:
    """
    Minimal Tezos node RPC client.

    Each request opens its own ``httpx.AsyncClient`` so the client holds no
    connection state and can be shared between concurrent submissions.

    Example:
        ```python
        rpc = NodeRpcClient(NodeConfig(url="https://rpc.ghostnet.teztnets.com"))
        head = await rpc.get_json("chains/main/blocks/head")
        ```
    """

    def __init__(self, config: NodeConfig) -> None:
        self._config = config
        self._base_url = config.url.rstrip("/")

    @property
    def config(self) -> NodeConfig:
        return self._config

    @property
    def chain(self) -> str:
        return self._config.chain

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str) -> Any:
        """
        GET a route and decode its JSON body.

        Args:
            path: Route relative to the node URL

        Returns:
            Decoded JSON value

        Raises:
            ChainQueryError: On transport failure, non-200 status or invalid JSON
        """
        url = self.url_for(path)
        _logger.debug("GET", extra={"url": url})

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout / 1000)
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise ChainQueryError(f"Request to {path} failed: {e}", path=path) from e

        if response.status_code != 200:
            raise ChainQueryError(
                f"Query failed: HTTP {response.status_code}",
                path=path,
                status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ChainQueryError(
                f"Malformed response from {path}",
                path=path,
                status=response.status_code,
                details={"raw_body": truncate_for_logging(response.text)},
            ) from e

    async def post(self, path: str, payload: Any) -> str:
        """
        POST a JSON payload and return the raw response text.

        Args:
            path: Route relative to the node URL
            payload: Any JSON-serializable value (strings are sent quoted)

        Returns:
            Response body as text, undecoded

        Raises:
            NodeRequestError: On transport failure or non-2xx status
        """
        url = self.url_for(path)
        body = json.dumps(payload)
        _logger.debug(
            "POST",
            extra={"url": url, "payload": truncate_for_logging(body)},
        )

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout / 1000)
            ) as client:
                response = await client.post(
                    url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            raise NodeRequestError(f"Request to {path} failed: {e}", path=path) from e

        if not 200 <= response.status_code < 300:
            raise NodeRequestError(
                f"Node rejected request: HTTP {response.status_code}",
                path=path,
                status=response.status_code,
                body=response.text,
            )

        return response.text
