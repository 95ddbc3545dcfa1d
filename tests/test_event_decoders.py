"""
Unit tests for event classification and schema-driven decoding.

Tests:
- Signature table lookup is case-insensitive
- Swap decoding reads sender/to from topics and amounts from data in order
- Transfer/Approval/Withdrawal/Sync field mapping
- Unknown and Deposit logs produce placeholders, not errors
- Malformed logs produce DecodeFailed / DecodeError, never partial events
"""
import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eth_abi import encode
from eth_utils import to_checksum_address

from txlens.services.decoders.base import (
    DecodeError,
    DecodeFailed,
    Decoded,
    EventKind,
    LogEntry,
    NoSchema,
    Unclassified,
)
from txlens.services.decoders.event_decoder import decode, decode_fields
from txlens.services.decoders.registry import (
    EVENT_SCHEMAS,
    SIGNATURE_TABLE,
    classify,
    classify_log,
    schema_for,
)

from chain_fixtures import (
    ALICE,
    APPROVAL_TOPIC,
    BOB,
    DEPOSIT_TOPIC,
    PAIR,
    ROUTER,
    SWAP_TOPIC,
    SYNC_TOPIC,
    TRANSFER_TOPIC,
    UNKNOWN_TOPIC,
    WETH,
    WITHDRAWAL_TOPIC,
    address_topic,
    raw_log,
    swap_log,
    transfer_log,
)


def _word(value: int) -> str:
    return format(value, "064x")


class TestClassification:
    """Test topic0 -> EventKind lookup."""

    @pytest.mark.parametrize("topic,kind", [
        (TRANSFER_TOPIC, EventKind.TRANSFER),
        (APPROVAL_TOPIC, EventKind.APPROVAL),
        (DEPOSIT_TOPIC, EventKind.DEPOSIT),
        (WITHDRAWAL_TOPIC, EventKind.WITHDRAWAL),
        (SWAP_TOPIC, EventKind.SWAP),
        (SYNC_TOPIC, EventKind.SYNC),
    ])
    def test_known_topics(self, topic, kind):
        assert classify(topic) is kind

    def test_case_insensitive_for_every_table_entry(self):
        """Uppercase and lowercase hex of the same hash classify identically."""
        for topic, kind in SIGNATURE_TABLE.items():
            upper = "0x" + topic[2:].upper()
            assert classify(upper) is kind, f"{upper} should classify as {kind}"
            assert classify(topic.lower()) is kind
            assert classify("0X" + topic[2:].upper()) is kind

    def test_missing_prefix_still_matches(self):
        assert classify(TRANSFER_TOPIC[2:]) is EventKind.TRANSFER

    def test_unknown_topic(self):
        assert classify(UNKNOWN_TOPIC) is EventKind.UNKNOWN

    def test_empty_topic(self):
        assert classify(None) is EventKind.UNKNOWN
        assert classify("") is EventKind.UNKNOWN

    def test_anonymous_log_is_unknown(self):
        log = LogEntry.from_rpc(raw_log(WETH, [], b""))
        assert classify_log(log) is EventKind.UNKNOWN

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SIGNATURE_TABLE["0x" + "00" * 32] = EventKind.TRANSFER
        with pytest.raises(TypeError):
            EVENT_SCHEMAS[EventKind.DEPOSIT] = ()

    def test_deposit_has_no_schema(self):
        assert schema_for(EventKind.DEPOSIT) is None
        assert schema_for(EventKind.UNKNOWN) is None


class TestSwapDecoding:
    """Swap: sender from topics[1], to from topics[2], amounts from data."""

    def test_swap_literal_mapping(self):
        data = bytes.fromhex(_word(1) + _word(2) + _word(3) + _word(4))
        log = LogEntry(
            address=to_checksum_address(PAIR),
            topics=(
                SWAP_TOPIC,
                "0x0000000000000000000000007a250d5630b4cf539739df2c5dacb4c659f2488d",
                "0x0000000000000000000000001111111111111111111111111111111111111111",
            ),
            data=data,
            log_index=3,
        )

        outcome = decode(log, classify_log(log))

        assert isinstance(outcome, Decoded)
        values = outcome.event.values
        assert values["sender"] == to_checksum_address(ROUTER)
        assert values["to"] == to_checksum_address(ALICE)
        assert values["amount0In"] == 1
        assert values["amount1In"] == 2
        assert values["amount0Out"] == 3
        assert values["amount1Out"] == 4
        assert list(values) == ["sender", "amount0In", "amount1In", "amount0Out", "amount1Out", "to"]

    def test_swap_large_amounts_are_exact_ints(self):
        big = 2**200 + 12345
        log = LogEntry.from_rpc(swap_log(amounts=(big, 0, 0, big - 1)))
        outcome = decode(log, EventKind.SWAP)

        assert outcome.event.values["amount0In"] == big
        assert isinstance(outcome.event.values["amount0In"], int)
        assert outcome.event.values["amount1Out"] == big - 1


class TestSchemaDecoding:
    """Field mapping for the remaining schemas."""

    def test_transfer(self):
        log = LogEntry.from_rpc(transfer_log(sender=ALICE, recipient=BOB, value=5 * 10**18))
        outcome = decode(log, EventKind.TRANSFER)

        assert isinstance(outcome, Decoded)
        assert outcome.kind is EventKind.TRANSFER
        assert outcome.contract_address == to_checksum_address(WETH)
        assert dict(outcome.event.values) == {
            "from": to_checksum_address(ALICE),
            "to": to_checksum_address(BOB),
            "value": 5 * 10**18,
        }

    def test_approval(self):
        log = LogEntry.from_rpc(raw_log(
            WETH,
            [APPROVAL_TOPIC, address_topic(ALICE), address_topic(ROUTER)],
            encode(["uint256"], [2**256 - 1]),
        ))
        outcome = decode(log, EventKind.APPROVAL)

        assert outcome.event.values["owner"] == to_checksum_address(ALICE)
        assert outcome.event.values["spender"] == to_checksum_address(ROUTER)
        assert outcome.event.values["value"] == 2**256 - 1

    def test_withdrawal(self):
        log = LogEntry.from_rpc(raw_log(
            WETH,
            [WITHDRAWAL_TOPIC, address_topic(ROUTER)],
            encode(["uint256"], [42]),
        ))
        outcome = decode(log, EventKind.WITHDRAWAL)

        assert dict(outcome.event.values) == {"src": to_checksum_address(ROUTER), "wad": 42}

    def test_sync_reads_data_only(self):
        log = LogEntry.from_rpc(raw_log(
            PAIR,
            [SYNC_TOPIC],
            encode(["uint112", "uint112"], [1000, 2**100]),
        ))
        outcome = decode(log, EventKind.SYNC)

        assert dict(outcome.event.values) == {"reserve0": 1000, "reserve1": 2**100}

    def test_decoded_values_are_immutable(self):
        outcome = decode(LogEntry.from_rpc(transfer_log()), EventKind.TRANSFER)
        with pytest.raises(TypeError):
            outcome.event.values["value"] = 0

    def test_to_dict_stringifies_ints(self):
        outcome = decode(LogEntry.from_rpc(transfer_log(value=7)), EventKind.TRANSFER)
        assert outcome.legacy_value()["value"] == "7"


class TestPlaceholders:
    """Unknown and schema-less kinds are terminal states, not errors."""

    def test_unknown_event(self):
        log = LogEntry.from_rpc(raw_log(WETH, [UNKNOWN_TOPIC], b"\x01" * 7))
        kind = classify_log(log)
        outcome = decode(log, kind)

        assert kind is EventKind.UNKNOWN
        assert isinstance(outcome, Unclassified)
        assert outcome.legacy_value() == "Unknown Event"
        assert outcome.contract_address == to_checksum_address(WETH)

    def test_deposit_event(self):
        log = LogEntry.from_rpc(raw_log(WETH, [DEPOSIT_TOPIC, address_topic(ALICE)], encode(["uint256"], [1])))
        outcome = decode(log, classify_log(log))

        assert isinstance(outcome, NoSchema)
        assert outcome.kind is EventKind.DEPOSIT
        assert outcome.legacy_value() == "Deposit Event"


class TestDecodeFailures:
    """Malformed logs fail per log with DecodeError, never partially."""

    def test_missing_indexed_topic(self):
        log = LogEntry.from_rpc(raw_log(
            WETH,
            [TRANSFER_TOPIC, address_topic(ALICE)],
            encode(["uint256"], [1]),
            log_index=9,
        ))

        with pytest.raises(DecodeError) as exc_info:
            decode_fields(log, EventKind.TRANSFER, schema_for(EventKind.TRANSFER))

        err = exc_info.value
        assert err.kind is EventKind.TRANSFER
        assert err.log_index == 9
        assert err.address == to_checksum_address(WETH)
        assert "Transfer" in str(err)

    def test_short_data(self):
        log = LogEntry.from_rpc(raw_log(
            PAIR,
            [SWAP_TOPIC, address_topic(ROUTER), address_topic(ALICE)],
            encode(["uint256"] * 2, [1, 2]),
        ))
        outcome = decode(log, EventKind.SWAP)

        assert isinstance(outcome, DecodeFailed)
        assert outcome.kind is EventKind.SWAP
        assert "Swap" in outcome.error
        assert outcome.legacy_value().startswith("Decode Error")

    def test_dirty_address_padding(self):
        dirty = "0x" + "ff" * 12 + ALICE[2:]
        log = LogEntry.from_rpc(raw_log(
            WETH,
            [TRANSFER_TOPIC, dirty, address_topic(BOB)],
            encode(["uint256"], [1]),
        ))
        outcome = decode(log, EventKind.TRANSFER)

        assert isinstance(outcome, DecodeFailed)

    def test_empty_data_for_transfer(self):
        log = LogEntry.from_rpc(raw_log(WETH, [TRANSFER_TOPIC, address_topic(ALICE), address_topic(BOB)], b""))
        assert isinstance(decode(log, EventKind.TRANSFER), DecodeFailed)
