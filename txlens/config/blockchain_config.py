"""
Blockchain Configuration Module

Contains the RPC endpoint settings, timeouts and the event signature table
used by the transaction log decoder.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


# RPC Configuration
DEFAULT_RPC_URL = "https://eth.llamarpc.com"
RPC_URL = os.getenv(
    "TXLENS_RPC_URL",
    os.getenv("WEB3_HTTP_URL", os.getenv("MAINNET_RPC_URL", DEFAULT_RPC_URL)),
)

# Query Configuration
REQUEST_TIMEOUT = _env_float("TXLENS_REQUEST_TIMEOUT", 30.0)  # seconds, HTTP provider
CALL_TIMEOUT = _env_float("TXLENS_CALL_TIMEOUT", 15.0)  # seconds, per receipt/contract call

# ABI used for name()/symbol() lookups
ABI_DIR = Path(__file__).parent / "abis"
DEFAULT_ABI_PATH = ABI_DIR / "erc20_metadata.json"
ABI_PATH = Path(os.getenv("TXLENS_ABI_PATH", str(DEFAULT_ABI_PATH)))

# Event Topic0 Hash Mappings
TOPIC0_HASH_MAP = {
    "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef": "Transfer",
    "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925": "Approval",
    "0xe1fffcc4923d04b559f4d29a8bfc6cda04eb5b0d3c460751c2402c5c5cc9109c": "Deposit",
    "0x7fcf532c15f0a6db0bd6d0e038bea71d30d808c7d98cb3bf7268a95bf5081b65": "Withdrawal",
    "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822": "Swap",
    "0x1c411e9a96e071241c2f21f7726b17ae89e3cab4c78be50e062b03a9fffbbad1": "Sync",
}

# Placeholder for contracts without a readable name()/symbol()
UNKNOWN_METADATA_VALUE = "Unknown"

# Transaction hash format: 0x + 64 hex chars
TX_HASH_LENGTH = 66
