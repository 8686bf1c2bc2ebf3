"""
Chain access: node RPC transport and read-only chain state queries.
"""

from tezforge.chain.reader import ChainReader, TezosNodeReader
from tezforge.chain.rpc import NodeRpcClient

__all__ = ["ChainReader", "TezosNodeReader", "NodeRpcClient"]
