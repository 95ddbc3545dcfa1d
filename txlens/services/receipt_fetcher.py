"""
Receipt Fetcher

Retrieves a transaction receipt through the chain client and normalizes
its logs into LogEntry objects. Fails softly: any RPC or normalization
error is logged and reported on the result instead of being raised.
"""

import logging
from typing import Any, Protocol, Tuple

from .decoders.base import FetchError, LogEntry, ReceiptResult

logger = logging.getLogger(__name__)


class ReceiptSource(Protocol):
    async def get_transaction_receipt(self, tx_hash: str) -> Any: ...


def logs_from_receipt(receipt: Any) -> Tuple[LogEntry, ...]:
    """
    Normalize the logs of a raw receipt.

    Raises:
        FetchError: receipt is missing or a log is malformed
    """
    if receipt is None:
        raise FetchError("node returned no receipt")

    raw_logs = receipt.get('logs')
    if raw_logs is None:
        raise FetchError("receipt has no 'logs' field")

    entries = []
    for position, raw in enumerate(raw_logs):
        try:
            entries.append(LogEntry.from_rpc(raw))
        except (KeyError, ValueError, TypeError) as e:
            raise FetchError(f"malformed log at position {position}: {type(e).__name__}: {e}") from e
    return tuple(entries)


async def fetch_receipt(client: ReceiptSource, tx_hash: str) -> ReceiptResult:
    """
    Fetch and normalize the logs of one transaction.

    Exactly one receipt call, no retries. Never raises; on failure the
    result has no logs and `error` describes what went wrong.
    """
    try:
        receipt = await client.get_transaction_receipt(tx_hash)
        logs = logs_from_receipt(receipt)
    except Exception as e:
        message = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
        logger.error(f"Error fetching transaction receipt {tx_hash}: {message}")
        return ReceiptResult(tx_hash=tx_hash, error=message)

    logger.info(f"Fetched {len(logs)} logs for {tx_hash}")
    return ReceiptResult(tx_hash=tx_hash, logs=logs)


async def fetch_logs(client: ReceiptSource, tx_hash: str) -> Tuple[LogEntry, ...]:
    """Logs of a transaction; empty on fetch failure"""
    result = await fetch_receipt(client, tx_hash)
    return result.logs
