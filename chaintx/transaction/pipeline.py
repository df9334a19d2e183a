"""Build, price, sign and broadcast EIP-1559 transactions."""

from __future__ import annotations

import asyncio

import structlog

from chaintx.constants import DEFAULT_GAS_LIMIT_MULTIPLIER, INTRINSIC_GAS
from chaintx.errors import BadInput, InsufficientGas
from chaintx.fees.market import FeeMarketEstimator, apply_multiplier
from chaintx.models.types import same_address
from chaintx.node.client import NodeClient
from chaintx.transaction.options import SendOptions
from chaintx.transaction.request import TransactionRequest
from chaintx.transaction.signing import AccountSigner, SignedTransaction, TransactionSigner

logger = structlog.get_logger()


class TransactionPipeline:
    """Turns (destination, calldata, value) into a broadcast transaction.

    Everything before the final broadcast is a read, so any error raised
    here leaves no trace on chain.

    The nonce is read once per call. Callers queueing a second transaction
    before the first is mined must pass ``SendOptions(nonce=n + 1)``
    themselves.

    Args:
        node: Node used for reads, estimation and broadcast
        fee_market: Fee pair derivation
        signer: Signing backend (local eth_account key by default)
    """

    def __init__(
        self,
        node: NodeClient,
        fee_market: FeeMarketEstimator | None = None,
        signer: TransactionSigner | None = None,
    ) -> None:
        self.node = node
        self.fee_market = fee_market or FeeMarketEstimator()
        self.signer = signer or AccountSigner()

    async def build_and_submit(
        self,
        destination: str,
        calldata: bytes,
        value: int,
        sender: str,
        private_key: str,
        options: SendOptions | None = None,
    ) -> str:
        """Build a transaction, sign it with ``private_key`` and broadcast it.

        Args:
            destination: Contract or account receiving the transaction
            calldata: Input data (empty for a plain transfer)
            value: Wei to send
            sender: Address of ``private_key``; checked against the signature
            private_key: Hex private key
            options: Fee, gas and nonce overrides

        Returns:
            Transaction hash as 0x-prefixed hex

        Raises:
            InsufficientGas: If the balance cannot pay for the transaction
                even at the base fee
            PreLondon: If the chain has no base fee
            BadInput: On an incompatible option or a structurally invalid
                or wrongly signed transaction
        """
        options = options or SendOptions()

        balance, chain_nonce, base_fee, chain_id = await asyncio.gather(
            self.node.get_balance(sender),
            self.node.get_transaction_count(sender),
            self.node.get_base_fee_per_gas(),
            self.node.chain_id(),
        )

        if balance < INTRINSIC_GAS:
            raise InsufficientGas(balance, INTRINSIC_GAS, INTRINSIC_GAS)

        fees = self.fee_market.estimate(base_fee, options)

        request = TransactionRequest(
            to=destination,
            nonce=options.nonce if options.nonce is not None else chain_nonce,
            chain_id=chain_id,
            priority_fee=fees.priority_fee,
            max_fee=fees.max_fee,
            value=value,
            data=calldata,
            access_list=options.access_list,
        )

        if options.gas_limit is not None:
            gas_limit = options.gas_limit
        else:
            gas_limit = await self.node.estimate_gas(request.to_rpc(sender))

        multiplier = options.gas_limit_multiplier
        if multiplier is None:
            multiplier = DEFAULT_GAS_LIMIT_MULTIPLIER
        request.gas_limit = apply_multiplier(gas_limit, multiplier)

        self._fit_to_balance(request, balance, fees.base_fee)

        request.validate()
        signed = self.signer.sign(request, private_key)
        self._verify_signed(request, signed, sender)

        tx_hash = await self.node.send_raw_transaction(signed.raw)
        logger.info(
            "transaction_submitted",
            tx_hash=tx_hash,
            sender=sender,
            to=destination,
            nonce=request.nonce,
            gas_limit=request.gas_limit,
            max_fee=request.max_fee,
        )
        return tx_hash

    def _fit_to_balance(self, request: TransactionRequest, balance: int, base_fee: int) -> None:
        """Lower the max fee to what the balance can pay, or fail.

        Raises:
            BadInput: If the gas limit is zero
            InsufficientGas: If even the base fee times the gas limit exceeds the balance
        """
        gas_limit = request.gas_limit
        if gas_limit <= 0:
            raise BadInput(f"Gas limit must be positive, got {gas_limit}")
        if request.max_fee * gas_limit <= balance:
            return
        if base_fee * gas_limit > balance:
            raise InsufficientGas(balance, base_fee, gas_limit)

        affordable = balance // gas_limit
        logger.warning(
            "max_fee_downscaled",
            requested=request.max_fee,
            affordable=affordable,
            gas_limit=gas_limit,
            balance=balance,
        )
        request.max_fee = affordable
        if request.priority_fee > affordable:
            request.priority_fee = affordable

    def _verify_signed(
        self, request: TransactionRequest, signed: SignedTransaction, sender: str
    ) -> None:
        request.validate()
        recovered = self.signer.recover_sender(signed)
        if not same_address(recovered, sender):
            raise BadInput(f"Transaction signed by {recovered}, expected {sender}")
