"""
Base classes and data structures for the transaction log decoder.
Provides the shared types used by the classifier, the event decoder,
the metadata resolver and the aggregating pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union
import logging

from eth_utils import is_hexstr, to_checksum_address
from hexbytes import HexBytes

from ...config.blockchain_config import UNKNOWN_METADATA_VALUE, TX_HASH_LENGTH

logger = logging.getLogger(__name__)


# ============================================================================
# ENUMS
# ============================================================================

class EventKind(Enum):
    """Known event types, identified by their topic0 signature hash"""
    TRANSFER = "Transfer"
    APPROVAL = "Approval"
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    SWAP = "Swap"
    SYNC = "Sync"
    UNKNOWN = "Unknown"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class TxLensError(Exception):
    """Base class for txlens errors"""


class FetchError(TxLensError):
    """Transaction receipt could not be retrieved"""


class MetadataError(TxLensError):
    """Contract name()/symbol() output was missing or unusable"""


class DecodeError(TxLensError):
    """A log's topics/data did not match the field schema of its event kind"""

    def __init__(self, message: str, address: str = "", kind: EventKind = EventKind.UNKNOWN,
                 log_index: Optional[int] = None):
        self.address = address
        self.kind = kind
        self.log_index = log_index
        location = f"log {log_index} " if log_index is not None else "log "
        super().__init__(f"{kind.value} {location}at {address or '<no address>'}: {message}")


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass(frozen=True)
class EventField:
    """One (name, type, indexed) entry of an event's ABI schema"""
    name: str
    abi_type: str
    indexed: bool = False


@dataclass(frozen=True)
class LogEntry:
    """Single log emitted by a transaction, as returned in its receipt"""
    address: str
    topics: Tuple[str, ...]
    data: bytes
    log_index: Optional[int] = None

    @property
    def topic0(self) -> Optional[str]:
        return self.topics[0] if self.topics else None

    @classmethod
    def from_rpc(cls, raw: Mapping[str, Any]) -> "LogEntry":
        """
        Build a LogEntry from a raw receipt log (web3 AttributeDict or plain dict).

        Topics and data may be HexBytes, bytes or hex strings.
        """
        data = raw.get('data', b'')
        if isinstance(data, str):
            data = HexBytes(data) if data not in ('', '0x') else b''

        log_index = raw.get('logIndex')
        if isinstance(log_index, str):
            log_index = int(log_index, 16) if log_index.startswith('0x') else int(log_index)

        return cls(
            address=to_checksum_address(raw['address']),
            topics=tuple(to_hex_str(t) for t in raw.get('topics', [])),
            data=bytes(data),
            log_index=log_index,
        )


@dataclass(frozen=True)
class DecodedEvent:
    """Typed field values decoded from one log"""
    contract_address: str
    kind: EventKind
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so a decoded event cannot change after creation
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def to_dict(self) -> dict:
        return {k: json_safe(v) for k, v in self.values.items()}


@dataclass(frozen=True)
class ContractMetadata:
    """name()/symbol() of the contract that emitted a log"""
    name: str
    symbol: str

    @classmethod
    def unknown(cls) -> "ContractMetadata":
        return cls(name=UNKNOWN_METADATA_VALUE, symbol=UNKNOWN_METADATA_VALUE)

    @property
    def is_unknown(self) -> bool:
        return self.name == UNKNOWN_METADATA_VALUE and self.symbol == UNKNOWN_METADATA_VALUE


# ============================================================================
# DECODE OUTCOMES
# ============================================================================

@dataclass(frozen=True)
class Decoded:
    """Log matched a known schema and decoded cleanly"""
    event: DecodedEvent

    @property
    def contract_address(self) -> str:
        return self.event.contract_address

    @property
    def kind(self) -> EventKind:
        return self.event.kind

    def legacy_value(self) -> Union[dict, str]:
        return self.event.to_dict()


@dataclass(frozen=True)
class Unclassified:
    """Topic0 is not in the signature table"""
    contract_address: str

    @property
    def kind(self) -> EventKind:
        return EventKind.UNKNOWN

    def legacy_value(self) -> Union[dict, str]:
        return "Unknown Event"


@dataclass(frozen=True)
class NoSchema:
    """Known event kind that has no field schema (e.g. Deposit)"""
    contract_address: str
    kind: EventKind

    def legacy_value(self) -> Union[dict, str]:
        return f"{self.kind.value} Event"


@dataclass(frozen=True)
class DecodeFailed:
    """Known event kind whose topics/data did not match its schema"""
    contract_address: str
    kind: EventKind
    error: str

    def legacy_value(self) -> Union[dict, str]:
        return f"Decode Error: {self.error}"


DecodeOutcome = Union[Decoded, Unclassified, NoSchema, DecodeFailed]


@dataclass(frozen=True)
class EnrichedRecord:
    """Decoded log joined with the emitting contract's metadata"""
    contract_address: str
    contract_name: str
    contract_symbol: str
    event_kind: EventKind
    outcome: DecodeOutcome

    @property
    def is_decoded(self) -> bool:
        return isinstance(self.outcome, Decoded)

    @property
    def values(self) -> Mapping[str, Any]:
        """Decoded field values, empty for placeholder outcomes"""
        if isinstance(self.outcome, Decoded):
            return self.outcome.event.values
        return MappingProxyType({})

    def flatten_values(self) -> List[str]:
        """'field : value' lines for display, or the placeholder text"""
        value = self.outcome.legacy_value()
        if isinstance(value, dict):
            return [f"{k} : {v}" for k, v in value.items()]
        return [value]

    def to_dict(self) -> dict:
        return {
            'contract-address': self.contract_address,
            'contract-name': self.contract_name,
            'contract-symbol': self.contract_symbol,
            'transaction-type': self.event_kind.value,
            'value': self.outcome.legacy_value(),
        }


@dataclass(frozen=True)
class ReceiptResult:
    """Logs of one receipt, or the error that prevented fetching them"""
    tx_hash: str
    logs: Tuple[LogEntry, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PipelineResult:
    """Ordered records for one transaction plus any fetch error"""
    tx_hash: str
    records: Tuple[EnrichedRecord, ...] = ()
    fetch_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.fetch_error is None

    def to_dict(self) -> dict:
        return {
            'tx_hash': self.tx_hash,
            'records': [r.to_dict() for r in self.records],
            'error': self.fetch_error,
        }


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def to_hex_str(value: Union[bytes, str]) -> str:
    """Normalize bytes/HexBytes/str to a lowercase 0x-prefixed hex string"""
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    text = str(value).strip().lower()
    return text if text.startswith("0x") else f"0x{text}"


def json_safe(value: Any) -> Any:
    """Stringify ints and bytes so values survive JSON encoding"""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return to_hex_str(value)
    return value


def is_valid_tx_hash(tx_hash: str) -> bool:
    """Check for 0x followed by 64 hex characters"""
    if not isinstance(tx_hash, str) or len(tx_hash) != TX_HASH_LENGTH or not tx_hash.startswith("0x"):
        return False
    return is_hexstr(tx_hash)

