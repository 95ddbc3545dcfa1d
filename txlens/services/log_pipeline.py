"""
Transaction Log Pipeline

hash -> receipt -> logs -> (classify -> decode) per log,
then contract metadata per log, joined by index into EnrichedRecords.

Metadata lookups run concurrently in a TaskGroup; output order always
follows the receipt's log order.
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence

import pandas as pd

from .chain_client import get_chain_client
from .decoders.abis import load_abi
from .decoders.base import (
    ContractMetadata,
    DecodeOutcome,
    EnrichedRecord,
    LogEntry,
    PipelineResult,
)
from .decoders.event_decoder import decode
from .decoders.registry import classify_log
from .metadata_resolver import ContractMetadataResolver
from .receipt_fetcher import fetch_receipt

logger = logging.getLogger(__name__)


class TransactionLogPipeline:
    """
    Decodes and enriches the logs of a transaction.

    The pipeline holds only the shared client and ABI; every call to
    process() builds its own metadata cache, so repeated calls against
    the same chain state return identical results.
    """

    def __init__(self, client: Optional[Any] = None, abi: Optional[List[dict]] = None):
        self.client = client if client is not None else get_chain_client()
        self.abi = abi if abi is not None else load_abi()

    def decode_logs(self, logs: Sequence[LogEntry]) -> List[DecodeOutcome]:
        """Classify and decode each log, preserving order"""
        return [decode(log, classify_log(log)) for log in logs]

    async def resolve_metadata(self, logs: Sequence[LogEntry]) -> List[ContractMetadata]:
        """Resolve contract metadata for every log concurrently, joined by index"""
        resolver = ContractMetadataResolver(self.client, abi=self.abi)
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(resolver.resolve(log.address)) for log in logs]
        logger.debug(f"Resolved metadata for {len(resolver.cached_addresses)} unique contracts")
        return [task.result() for task in tasks]

    async def process_detailed(self, tx_hash: str) -> PipelineResult:
        """
        Run the full pipeline for one transaction. Never raises.

        A failed receipt fetch yields no records and sets fetch_error,
        so callers can tell it apart from a receipt with no logs.
        """
        try:
            receipt = await fetch_receipt(self.client, tx_hash)
            if not receipt.ok:
                return PipelineResult(tx_hash=tx_hash, fetch_error=receipt.error)

            outcomes = self.decode_logs(receipt.logs)
            metadata = await self.resolve_metadata(receipt.logs)

            records = tuple(
                EnrichedRecord(
                    contract_address=log.address,
                    contract_name=meta.name,
                    contract_symbol=meta.symbol,
                    event_kind=outcome.kind,
                    outcome=outcome,
                )
                for log, outcome, meta in zip(receipt.logs, outcomes, metadata)
            )
        except Exception as e:
            logger.exception(f"Unexpected error processing {tx_hash}: {e}")
            return PipelineResult(tx_hash=tx_hash, fetch_error=f"{type(e).__name__}: {e}")

        decoded = sum(1 for r in records if r.is_decoded)
        logger.info(f"Processed {tx_hash}: {len(records)} logs, {decoded} decoded")
        return PipelineResult(tx_hash=tx_hash, records=records)

    async def process(self, tx_hash: str) -> List[EnrichedRecord]:
        """Ordered EnrichedRecords for a transaction; empty on fetch failure"""
        result = await self.process_detailed(tx_hash)
        return list(result.records)


def records_to_frame(records: Sequence[EnrichedRecord]) -> pd.DataFrame:
    """Flatten records into a display/export table, one row per log"""
    columns = ['#', 'Contract Address', 'Contract Name', 'Symbol', 'Event', 'Data']
    rows = [
        {
            '#': position,
            'Contract Address': record.contract_address,
            'Contract Name': record.contract_name,
            'Symbol': record.contract_symbol,
            'Event': record.event_kind.value,
            'Data': '; '.join(record.flatten_values()),
        }
        for position, record in enumerate(records)
    ]
    return pd.DataFrame(rows, columns=columns)
