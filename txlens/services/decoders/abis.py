"""
ABI Loading Module

Loads the contract ABI used for name()/symbol() lookups from disk.
Loaded once per path and cached for the life of the process.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from ...config.blockchain_config import ABI_PATH

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _load_abi_cached(path: str) -> tuple:
    with open(path, "r", encoding="utf-8") as f:
        abi = json.load(f)

    if not isinstance(abi, list):
        raise ValueError(f"ABI at {path} must be a JSON list, got {type(abi).__name__}")

    logger.info(f"Loaded ABI with {len(abi)} entries from {Path(path).name}")
    return tuple(abi)


def load_abi(path: Optional[Union[str, Path]] = None) -> List[dict]:
    """
    Load a contract ABI document.

    Args:
        path: ABI JSON file; defaults to the configured ABI_PATH

    Returns:
        ABI as a list of entries (a fresh list; the cached copy is not exposed)
    """
    return list(_load_abi_cached(str(path or ABI_PATH)))


def abi_has_function(abi: List[dict], name: str) -> bool:
    """Check whether an ABI declares a function with the given name"""
    return any(entry.get("type") == "function" and entry.get("name") == name for entry in abi)
