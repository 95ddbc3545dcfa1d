"""
Chain Client

Thin async wrapper around web3's AsyncWeb3 exposing the two operations
the log pipeline needs: fetch a transaction receipt and call a read-only
contract method. Each call is bounded by the configured call timeout.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from eth_utils import to_checksum_address
from web3 import AsyncWeb3

from ..config.blockchain_config import RPC_URL, REQUEST_TIMEOUT, CALL_TIMEOUT
from .decoders.base import MetadataError

logger = logging.getLogger(__name__)


class ChainClient:
    """
    Async JSON-RPC client for a single node endpoint.

    Shared read-only across every call of a pipeline run; holds no
    per-transaction state.
    """

    def __init__(
        self,
        rpc_url: str = RPC_URL,
        request_timeout: float = REQUEST_TIMEOUT,
        call_timeout: float = CALL_TIMEOUT,
    ):
        self.rpc_url = rpc_url
        self.request_timeout = request_timeout
        self.call_timeout = call_timeout
        self.w3 = self._create_client()

    def _create_client(self) -> AsyncWeb3:
        logger.info(f"[RPC: {self.rpc_url}] Initializing AsyncWeb3 client")
        return AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                self.rpc_url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=self.request_timeout)},
            )
        )

    async def get_transaction_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """
        Fetch a transaction receipt.

        Raises whatever web3 raises (TransactionNotFound, connection errors)
        and asyncio.TimeoutError when the call exceeds call_timeout.
        """
        logger.debug(f"[RPC: {self.rpc_url}] eth_getTransactionReceipt {tx_hash}")
        receipt = await asyncio.wait_for(
            self.w3.eth.get_transaction_receipt(tx_hash),
            timeout=self.call_timeout,
        )
        logger.debug(f"[RPC: {self.rpc_url}] Receipt {tx_hash} has {len(receipt.get('logs', []))} logs")
        return receipt

    async def call_contract_method(self, address: str, abi: List[dict], method_name: str) -> Any:
        """
        Call a zero-argument read-only contract method.

        Raises:
            MetadataError: the method returned nothing usable
            web3 exceptions / asyncio.TimeoutError on call failure
        """
        contract = self.w3.eth.contract(address=to_checksum_address(address), abi=abi)
        fn = getattr(contract.functions, method_name)
        result = await asyncio.wait_for(fn().call(), timeout=self.call_timeout)
        if result is None:
            raise MetadataError(f"{method_name}() on {address} returned no value")
        return result

    async def close(self):
        """Close the provider's HTTP session"""
        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()


_clients: Dict[str, ChainClient] = {}


def get_chain_client(rpc_url: Optional[str] = None) -> ChainClient:
    """Get or create the shared ChainClient for an RPC endpoint"""
    url = rpc_url or RPC_URL
    client = _clients.get(url)
    if client is None:
        logger.info(f"[RPC: {url}] Creating new chain client")
        client = ChainClient(rpc_url=url)
        _clients[url] = client
    return client
