"""Token helpers built on the ledger adapter."""

from chaintx.tokens.erc20 import APPROVED_THRESHOLD, Erc20
from chaintx.tokens.weth import WethWrapper

__all__ = ["Erc20", "APPROVED_THRESHOLD", "WethWrapper"]
