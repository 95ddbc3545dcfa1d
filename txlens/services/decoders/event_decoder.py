"""
Event Decoder

Decodes a classified log into typed field values using the static
schemas from the registry. ABI word decoding is done by eth_abi.

Decoding rule:
- indexed fields are read from topics[1:] in declared order
  (topics[0] is the event signature)
- non-indexed fields are read from the data payload, as one ABI tuple,
  in declared order
"""

from typing import Any, Dict, Optional, Sequence
import logging

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address
from hexbytes import HexBytes

from .base import (
    DecodeError,
    DecodeFailed,
    Decoded,
    DecodedEvent,
    DecodeOutcome,
    EventField,
    EventKind,
    LogEntry,
    NoSchema,
    Unclassified,
)
from .registry import schema_for

logger = logging.getLogger(__name__)


def _topic_bytes(topic: str) -> bytes:
    raw = bytes(HexBytes(topic))
    if len(raw) != 32:
        raise ValueError(f"topic {topic} is {len(raw)} bytes, expected 32")
    return raw


def _normalize_value(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    return value


def decode_fields(log: LogEntry, kind: EventKind, schema: Sequence[EventField]) -> DecodedEvent:
    """
    Decode a log against a field schema.

    Raises:
        DecodeError: topics missing, data too short or badly padded.
            No partial DecodedEvent is ever returned.
    """
    indexed = [f for f in schema if f.indexed]
    non_indexed = [f for f in schema if not f.indexed]

    # Skip topics[0], the event signature
    indexed_topics = log.topics[1:]
    if len(indexed_topics) < len(indexed):
        raise DecodeError(
            f"expected {len(indexed)} indexed topics, got {len(indexed_topics)}",
            address=log.address, kind=kind, log_index=log.log_index,
        )

    values: Dict[str, Any] = {}
    try:
        for fld, topic in zip(indexed, indexed_topics):
            (value,) = abi_decode([fld.abi_type], _topic_bytes(topic))
            values[fld.name] = _normalize_value(fld.abi_type, value)

        if non_indexed:
            decoded = abi_decode([f.abi_type for f in non_indexed], log.data)
            for fld, value in zip(non_indexed, decoded):
                values[fld.name] = _normalize_value(fld.abi_type, value)
    except (DecodingError, ValueError, TypeError) as e:
        raise DecodeError(
            f"{type(e).__name__}: {e}",
            address=log.address, kind=kind, log_index=log.log_index,
        ) from e

    # Keep the declared field order in the output mapping
    ordered = {fld.name: values[fld.name] for fld in schema}
    return DecodedEvent(contract_address=log.address, kind=kind, values=ordered)


def decode(log: LogEntry, kind: EventKind) -> DecodeOutcome:
    """
    Decode a log of the given kind into a DecodeOutcome.

    Unknown kinds yield Unclassified, kinds without a schema yield NoSchema,
    and schema mismatches yield DecodeFailed instead of raising.
    """
    if kind is EventKind.UNKNOWN:
        return Unclassified(contract_address=log.address)

    schema: Optional[Sequence[EventField]] = schema_for(kind)
    if schema is None:
        return NoSchema(contract_address=log.address, kind=kind)

    try:
        event = decode_fields(log, kind, schema)
    except DecodeError as e:
        logger.warning(f"Could not decode {kind.value} log: {e}")
        return DecodeFailed(contract_address=log.address, kind=kind, error=str(e))

    logger.debug(f"Decoded {kind.value} at {log.address}: {event.to_dict()}")
    return Decoded(event=event)
