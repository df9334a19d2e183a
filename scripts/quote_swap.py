#!/usr/bin/env python3
"""Quote a UniswapV3 exact-input swap against a live node.

Usage:
    python scripts/quote_swap.py --rpc-url https://eth.llamarpc.com \\
        --token-in 0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2 \\
        --token-out 0x6b175474e89094c44da98b954eedeac495271d0f \\
        --amount 1000000000000000000 --fee 500
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chaintx import connect  # noqa: E402
from chaintx.amm.uniswap_v3 import DEFAULT_FEE  # noqa: E402
from chaintx.constants import DAI, WETH  # noqa: E402
from chaintx.errors import TxEngineError  # noqa: E402
from chaintx.logging_config import configure_logging  # noqa: E402

logger = structlog.get_logger()

# Any address works as the caller of a read-only quote
DEFAULT_CALLER = "0x0000000000000000000000000000000000000001"


async def main() -> int:
    """Main entry point for the quote tool."""
    parser = argparse.ArgumentParser(
        description="Quote a UniswapV3 exact-input single-pool swap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--rpc-url",
        type=str,
        default=os.environ.get("RPC_URL"),
        help="JSON-RPC endpoint (default: $RPC_URL)",
    )
    parser.add_argument("--token-in", type=str, default=WETH, help="Input token (default: WETH)")
    parser.add_argument("--token-out", type=str, default=DAI, help="Output token (default: DAI)")
    parser.add_argument(
        "--amount", type=int, default=10**18, help="Input amount in base units (default: 1e18)"
    )
    parser.add_argument(
        "--fee", type=int, default=DEFAULT_FEE, help=f"Fee tier (default: {DEFAULT_FEE})"
    )
    parser.add_argument(
        "--price-limit", type=int, default=0, help="sqrtPriceX96 limit (default: 0, none)"
    )
    parser.add_argument("--caller", type=str, default=DEFAULT_CALLER, help="Quote caller")
    parser.add_argument("--timeout", type=float, default=30.0, help="Request timeout (s)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()
    configure_logging("DEBUG" if args.verbose else "INFO")

    if not args.rpc_url:
        parser.error("--rpc-url or RPC_URL is required")

    client = connect(args.rpc_url, args.timeout)
    try:
        quote = await client.quotes.quote_with_bounds(
            args.caller,
            args.token_in,
            args.token_out,
            args.amount,
            fee=args.fee,
            sqrt_price_limit=args.price_limit,
        )
    except TxEngineError as e:
        logger.error("quote_failed", error=str(e))
        return 1
    finally:
        await client.close()

    print(f"amount_in:      {quote.amount_in}")
    print(f"amount_out:     {quote.amount_out}")
    print(f"amount_out_min: {quote.amount_out_min}")
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
