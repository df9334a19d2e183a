"""JSON-RPC node access."""

from chaintx.node.client import NodeClient, to_quantity

__all__ = ["NodeClient", "to_quantity"]
