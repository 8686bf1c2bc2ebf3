"""
Forging: the codec interface and the local / remote forging strategies.
"""

from tezforge.forging.codec import OperationCodec
from tezforge.forging.forger import Forger, LocalForger, RemoteValidatingForger

__all__ = ["OperationCodec", "Forger", "LocalForger", "RemoteValidatingForger"]
