"""chaintx - EIP-1559 transactions and UniswapV3 swaps over JSON-RPC."""

from chaintx.client import Web3Client, connect
from chaintx.config import ClientConfig
from chaintx.transaction.options import SendOptions

__version__ = "0.1.0"
__all__ = ["Web3Client", "connect", "ClientConfig", "SendOptions", "__version__"]
