"""
Node configuration.

Example:
    ```python
    from tezforge.config import Network, get_node_config

    config = get_node_config(Network.GHOSTNET)
    # or, from TEZFORGE_* variables / a .env file
    config = NodeConfig.from_env()
    ```
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from tezforge.constants import DEFAULT_TIMEOUT_MS

__all__ = ["Network", "NodeConfig", "NETWORKS", "get_node_config"]

_TRUTHY = {"1", "true", "yes", "on"}


class Network(str, Enum):
    MAINNET = "mainnet"
    GHOSTNET = "ghostnet"


class NodeConfig(BaseModel):
    """
    Connection settings for one Tezos node.

    Example:
        ```python
        config = NodeConfig(url="https://rpc.ghostnet.teztnets.com")
        ```
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        description="Base URL of the node RPC (no trailing route)",
    )
    chain: str = Field(
        default="main",
        description="Chain alias used in RPC routes",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        ge=1000,
        description="Request timeout in milliseconds",
    )
    use_remote_forge: bool = Field(
        default=False,
        description="Forge on the node and validate locally instead of forging locally. Not trustless",
    )

    @classmethod
    def from_env(cls, prefix: str = "TEZFORGE_", dotenv_path: Optional[str] = None) -> NodeConfig:
        """
        Build a config from environment variables.

        Reads ``{prefix}NODE_URL`` (required), ``{prefix}CHAIN``,
        ``{prefix}TIMEOUT`` and ``{prefix}USE_REMOTE_FORGE``, after loading
        a ``.env`` file if one is found.

        Args:
            prefix: Variable name prefix
            dotenv_path: Explicit .env file (searched for when omitted)

        Returns:
            NodeConfig

        Raises:
            KeyError: If the node URL variable is not set
        """
        load_dotenv(dotenv_path)

        values: Dict[str, object] = {"url": os.environ[f"{prefix}NODE_URL"]}
        chain = os.environ.get(f"{prefix}CHAIN")
        if chain:
            values["chain"] = chain
        timeout = os.environ.get(f"{prefix}TIMEOUT")
        if timeout:
            values["timeout"] = int(timeout)
        remote = os.environ.get(f"{prefix}USE_REMOTE_FORGE")
        if remote:
            values["use_remote_forge"] = remote.strip().lower() in _TRUTHY
        return cls(**values)


NETWORKS: Dict[Network, NodeConfig] = {
    Network.MAINNET: NodeConfig(url="https://mainnet.api.tez.ie"),
    Network.GHOSTNET: NodeConfig(url="https://rpc.ghostnet.teztnets.com"),
}


def get_node_config(network: Network, url: Optional[str] = None) -> NodeConfig:
    cfg = NETWORKS[network]
    if url:
        return cfg.model_copy(update={"url": url})
    return cfg
