"""Choose the ledger adapter for an endpoint URL."""

from __future__ import annotations

from dataclasses import replace

import structlog

from chaintx.config import ClientConfig
from chaintx.ledger.base import LedgerAdapter
from chaintx.ledger.standard import StandardLedgerAdapter
from chaintx.ledger.tron import AlternateLedgerAdapter, TronHttpClient, parse_tron_url
from chaintx.node.client import NodeClient
from chaintx.transaction.confirmation import ConfirmationWaiter
from chaintx.transaction.pipeline import TransactionPipeline

logger = structlog.get_logger()


def node_config_for(config: ClientConfig) -> ClientConfig:
    """Config for the JSON-RPC reads behind ``config.url``.

    A Tron URL (``<base>/jsonrpc/<api key>``) is rewritten to
    ``<base>/jsonrpc`` with the API key moved into a header.
    """
    tron = parse_tron_url(config.url)
    if tron is None:
        return config
    node_config = replace(config, url=tron.jsonrpc_url)
    for key, value in tron.headers().items():
        node_config = node_config.with_header(key, value)
    return node_config


def select_ledger(
    config: ClientConfig,
    node: NodeClient,
    pipeline: TransactionPipeline | None = None,
    waiter: ConfirmationWaiter | None = None,
) -> LedgerAdapter:
    """Build the adapter that submits transactions for ``config.url``.

    Args:
        config: Client config as given by the user (original URL)
        node: JSON-RPC client, already pointed at the node's read endpoint
        pipeline: Pipeline for the standard adapter
        waiter: Confirmation waiter for the standard adapter
    """
    tron = parse_tron_url(config.url)
    if tron is None:
        return StandardLedgerAdapter(node, pipeline, waiter)

    logger.info("tron_ledger_selected", base_url=tron.base_url)
    headers = {**config.header_dict(), **tron.headers()}
    http = TronHttpClient(tron.base_url, config.timeout, headers)
    return AlternateLedgerAdapter(http)
