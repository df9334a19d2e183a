"""Ledger adapters: how transactions reach the chain.

- StandardLedgerAdapter: EIP-1559 pipeline over eth_sendRawTransaction
- AlternateLedgerAdapter: Tron ``/wallet/*`` HTTP API

The adapter is picked once per client by :func:`select_ledger`.
"""

from chaintx.ledger.base import LedgerAdapter
from chaintx.ledger.selection import node_config_for, select_ledger
from chaintx.ledger.standard import StandardLedgerAdapter
from chaintx.ledger.tron import (
    API_KEY_HEADERS,
    AlternateLedgerAdapter,
    TronEndpoint,
    TronHttpClient,
    parse_tron_url,
    to_tron_hex,
)

__all__ = [
    "LedgerAdapter",
    "StandardLedgerAdapter",
    "AlternateLedgerAdapter",
    "TronHttpClient",
    "TronEndpoint",
    "API_KEY_HEADERS",
    "parse_tron_url",
    "to_tron_hex",
    "node_config_for",
    "select_ledger",
]
