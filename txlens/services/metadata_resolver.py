"""
Contract Metadata Resolver

Looks up name() and symbol() for the contract that emitted a log.
Any failure degrades to the "Unknown"/"Unknown" placeholder for the
whole record. Results are cached per resolver instance, and concurrent
lookups of the same address share one in-flight resolution.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

from .decoders.abis import load_abi
from .decoders.base import ContractMetadata, MetadataError

logger = logging.getLogger(__name__)


class ContractCaller(Protocol):
    async def call_contract_method(self, address: str, abi: List[dict], method_name: str) -> Any: ...


def _as_text(method_name: str, address: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    raise MetadataError(f"{method_name}() on {address} returned {type(value).__name__}, expected string")


class ContractMetadataResolver:
    """
    Resolves ContractMetadata for contract addresses.

    Create one resolver per pipeline invocation; its cache is not meant
    to outlive that invocation.
    """

    def __init__(self, client: ContractCaller, abi: Optional[List[dict]] = None):
        self.client = client
        self.abi = abi if abi is not None else load_abi()
        self._cache: Dict[str, "asyncio.Task[ContractMetadata]"] = {}

    async def resolve(self, address: str) -> ContractMetadata:
        """Metadata for one address. Only cancellation propagates."""
        key = address.lower()
        task = self._cache.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(address))
            self._cache[key] = task
        else:
            logger.debug(f"Metadata cache hit for {address}")
        return await asyncio.shield(task)

    async def _fetch(self, address: str) -> ContractMetadata:
        name_result, symbol_result = await asyncio.gather(
            self.client.call_contract_method(address, self.abi, "name"),
            self.client.call_contract_method(address, self.abi, "symbol"),
            return_exceptions=True,
        )

        for result in (name_result, symbol_result):
            if isinstance(result, asyncio.CancelledError):
                raise result

        try:
            for result in (name_result, symbol_result):
                if isinstance(result, Exception):
                    raise result
            metadata = ContractMetadata(
                name=_as_text("name", address, name_result),
                symbol=_as_text("symbol", address, symbol_result),
            )
        except Exception as e:
            logger.warning(f"Error fetching contract name/symbol for {address}: {type(e).__name__}: {e}")
            return ContractMetadata.unknown()

        logger.debug(f"Resolved {address} -> {metadata.name} ({metadata.symbol})")
        return metadata

    @property
    def cached_addresses(self) -> List[str]:
        return list(self._cache)
