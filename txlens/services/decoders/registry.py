"""
Event Registry - static signature and schema tables.

Maps a log's topic0 (keccak256 of the event signature) to an EventKind,
and an EventKind to the ordered (name, type, indexed) field schema used
to decode it. Both tables are built once at import and are read-only.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple
import logging

from ...config.blockchain_config import TOPIC0_HASH_MAP
from .base import EventField, EventKind, LogEntry

logger = logging.getLogger(__name__)


def _build_signature_table() -> Mapping[str, EventKind]:
    table = {topic.lower(): EventKind(name) for topic, name in TOPIC0_HASH_MAP.items()}
    return MappingProxyType(table)


# topic0 (lowercase, 0x-prefixed) -> EventKind
SIGNATURE_TABLE: Mapping[str, EventKind] = _build_signature_table()

# Field order must match the event declaration: indexed fields come from
# topics[1:], the rest from the data payload, each in declared order.
EVENT_SCHEMAS: Mapping[EventKind, Tuple[EventField, ...]] = MappingProxyType({
    # Transfer(address indexed from, address indexed to, uint256 value)
    EventKind.TRANSFER: (
        EventField("from", "address", indexed=True),
        EventField("to", "address", indexed=True),
        EventField("value", "uint256"),
    ),
    # Approval(address indexed owner, address indexed spender, uint256 value)
    EventKind.APPROVAL: (
        EventField("owner", "address", indexed=True),
        EventField("spender", "address", indexed=True),
        EventField("value", "uint256"),
    ),
    # Sync(uint112 reserve0, uint112 reserve1)
    EventKind.SYNC: (
        EventField("reserve0", "uint112"),
        EventField("reserve1", "uint112"),
    ),
    # Withdrawal(address indexed src, uint256 wad)
    EventKind.WITHDRAWAL: (
        EventField("src", "address", indexed=True),
        EventField("wad", "uint256"),
    ),
    # Swap(address indexed sender, uint amount0In, uint amount1In,
    #      uint amount0Out, uint amount1Out, address indexed to)
    EventKind.SWAP: (
        EventField("sender", "address", indexed=True),
        EventField("amount0In", "uint256"),
        EventField("amount1In", "uint256"),
        EventField("amount0Out", "uint256"),
        EventField("amount1Out", "uint256"),
        EventField("to", "address", indexed=True),
    ),
})


def _normalize_topic(topic: str) -> str:
    topic = topic.strip().lower()
    return topic if topic.startswith("0x") else f"0x{topic}"


def classify(topic0: Optional[str]) -> EventKind:
    """
    Classify a topic0 hash. Matching is case-insensitive.

    Returns EventKind.UNKNOWN for empty or unrecognised hashes.
    """
    if not topic0:
        return EventKind.UNKNOWN
    return SIGNATURE_TABLE.get(_normalize_topic(topic0), EventKind.UNKNOWN)


def classify_log(log: LogEntry) -> EventKind:
    """Classify a log by its first topic (anonymous logs are Unknown)"""
    kind = classify(log.topic0)
    if kind is EventKind.UNKNOWN:
        logger.debug(f"Unrecognised topic0 {log.topic0} at {log.address}")
    return kind


def schema_for(kind: EventKind) -> Optional[Tuple[EventField, ...]]:
    """Field schema for an event kind, or None if it has none"""
    return EVENT_SCHEMAS.get(kind)
