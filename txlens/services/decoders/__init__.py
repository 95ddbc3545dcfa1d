"""
Event log decoders.

- registry: topic0 -> EventKind table and per-kind field schemas
- event_decoder: schema-driven decoding of topics/data with eth_abi
- abis: ABI documents for contract metadata calls
- base: shared dataclasses, decode outcomes and errors
"""

from .base import (
    # Enums
    EventKind,
    # Errors
    TxLensError,
    FetchError,
    DecodeError,
    MetadataError,
    # Dataclasses
    EventField,
    LogEntry,
    DecodedEvent,
    ContractMetadata,
    EnrichedRecord,
    ReceiptResult,
    PipelineResult,
    # Decode outcomes
    Decoded,
    Unclassified,
    NoSchema,
    DecodeFailed,
    DecodeOutcome,
    # Helpers
    to_hex_str,
    is_valid_tx_hash,
)
from .registry import SIGNATURE_TABLE, EVENT_SCHEMAS, classify, classify_log, schema_for
from .event_decoder import decode, decode_fields
from .abis import load_abi

__all__ = [
    'EventKind',
    'TxLensError',
    'FetchError',
    'DecodeError',
    'MetadataError',
    'EventField',
    'LogEntry',
    'DecodedEvent',
    'ContractMetadata',
    'EnrichedRecord',
    'ReceiptResult',
    'PipelineResult',
    'Decoded',
    'Unclassified',
    'NoSchema',
    'DecodeFailed',
    'DecodeOutcome',
    'to_hex_str',
    'is_valid_tx_hash',
    'SIGNATURE_TABLE',
    'EVENT_SCHEMAS',
    'classify',
    'classify_log',
    'schema_for',
    'decode',
    'decode_fields',
    'load_abi',
]
