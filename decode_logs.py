"""
Transaction Log Decoder - command line helper using the same pipeline as app.py

Usage:
    python decode_logs.py <tx_hash>
    python decode_logs.py 0x24c1b2b6a4d1bc7f41dbba71a584ac2a4f123b32686364b9fc111b9b207215e2
    python decode_logs.py <tx_hash> --json      # Print records as JSON
    python decode_logs.py <tx_hash> --verbose   # Write debug logs to txlens_debug.log
    python decode_logs.py <tx_hash> -v          # Short for --verbose

Environment:
    TXLENS_RPC_URL      Node endpoint (falls back to WEB3_HTTP_URL / MAINNET_RPC_URL)
    TXLENS_DEBUG=1      Same as --verbose
"""

import asyncio
import json
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from txlens.logging_config import setup_logging, DEBUG_LOG_PATH, TXLENS_DEBUG
from txlens.services.chain_client import ChainClient
from txlens.services.decoders.base import PipelineResult, is_valid_tx_hash
from txlens.services.log_pipeline import TransactionLogPipeline


def print_section(title: str, char: str = "="):
    """Print a section header"""
    print(f"\n{char * 60}")
    print(f" {title}")
    print(f"{char * 60}")


def print_result(result: PipelineResult):
    """Formatted summary of the decoded logs"""
    print_section(f"TRANSACTION {result.tx_hash}")

    if not result.ok:
        print(f"[!] Could not fetch receipt: {result.fetch_error}")
        return

    if not result.records:
        print("Transaction emitted no logs.")
        return

    for position, record in enumerate(result.records):
        print_section(f"LOG #{position}: {record.event_kind.value}", char="-")
        print(f"  Contract address : {record.contract_address}")
        print(f"  Contract name    : {record.contract_name}")
        print(f"  Contract symbol  : {record.contract_symbol}")
        print("  Data:")
        for line in record.flatten_values():
            print(f"    {line}")


async def run(tx_hash: str) -> PipelineResult:
    client = ChainClient()
    try:
        return await TransactionLogPipeline(client=client).process_detailed(tx_hash)
    finally:
        await client.close()


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    tx_hash = sys.argv[1]

    # Parse flags
    as_json = "--json" in sys.argv
    verbose = "--verbose" in sys.argv or "-v" in sys.argv

    # Keep stdout clean for JSON output
    setup_logging(level=logging.WARNING if as_json else logging.INFO, debug=verbose or TXLENS_DEBUG)

    if not is_valid_tx_hash(tx_hash):
        print(f"[!] Invalid transaction hash: {tx_hash}")
        print("    Expected format: 0x followed by 64 hex characters")
        sys.exit(1)

    result = asyncio.run(run(tx_hash))

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)

    if verbose:
        print_section("DEBUG LOG LOCATION")
        print(f"Detailed decode trace written to: {DEBUG_LOG_PATH}")

    if not result.ok:
        sys.exit(2)


if __name__ == "__main__":
    main()
