"""
Transaction Logs Tab UI

Hash input, status line, summary table and one card per decoded log.
"""

from shiny import ui

from ...services.decoders.base import EnrichedRecord, PipelineResult

# Event badge colors
EVENT_COLORS = {
    "Transfer": "primary",
    "Approval": "info",
    "Deposit": "success",
    "Withdrawal": "warning",
    "Swap": "danger",
    "Sync": "secondary",
    "Unknown": "dark",
}


def transaction_logs_ui():
    """Transaction log decoder page"""
    return ui.div(
        ui.h2("Transaction Log Decoder"),
        ui.p("Decode the event logs of an Ethereum transaction", class_="text-muted mb-4"),

        ui.card(
            ui.card_header("Transaction"),
            ui.layout_columns(
                ui.input_text(
                    "tx_hash",
                    "Transaction hash:",
                    placeholder="0x...",
                    width="100%",
                ),
                ui.div(
                    ui.input_action_button(
                        "decode_tx",
                        "Decode",
                        class_="btn btn-primary w-100",
                    ),
                    class_="d-flex align-items-end h-100",
                ),
                col_widths=[10, 2],
            ),
            ui.output_ui("decode_status"),
            class_="mb-4",
        ),

        ui.card(
            ui.card_header("Logs"),
            ui.output_data_frame("records_table"),
            full_screen=True,
            class_="mb-4",
        ),

        ui.div(
            ui.output_ui("record_cards"),
            class_="log-cards-container",
        ),

        ui.tags.style("""
            .log-card {
                border: 1px solid #dee2e6;
                border-radius: 12px;
                padding: 16px;
                margin-bottom: 10px;
                background: white;
            }
            .log-card .address-display {
                font-family: monospace;
                font-size: 0.85rem;
                word-break: break-all;
            }
            .log-card .value-line {
                font-family: monospace;
                font-size: 0.8rem;
                color: #4b5563;
                word-break: break-all;
            }
        """),

        class_="p-4",
    )


def record_card_ui(position: int, record: EnrichedRecord) -> ui.Tag:
    """
    Render a card for one enriched log record.

    Args:
        position: index of the log in the receipt
        record: EnrichedRecord from the pipeline
    """
    kind = record.event_kind.value
    badge_color = EVENT_COLORS.get(kind, "secondary")

    return ui.div(
        ui.div(
            ui.span(f"#{position}", class_="text-muted me-2"),
            ui.span(kind, class_=f"badge bg-{badge_color} me-2"),
            class_="d-flex align-items-center mb-2",
        ),
        ui.layout_columns(
            ui.div(
                ui.div(ui.tags.b("Contract address : "), ui.span(record.contract_address, class_="address-display")),
                ui.div(ui.tags.b("Contract name : "), record.contract_name),
                ui.div(ui.tags.b("Contract symbol : "), record.contract_symbol),
            ),
            ui.div(
                ui.div(ui.tags.b("Data")),
                *[ui.div(line, class_="value-line") for line in record.flatten_values()],
            ),
            col_widths=[6, 6],
        ),
        class_="log-card",
    )


def status_ui(result: PipelineResult) -> ui.Tag:
    """Status line under the hash input"""
    if not result.ok:
        return ui.div(result.fetch_error, class_="alert alert-danger mt-3 mb-0")
    count = len(result.records)
    if count == 0:
        return ui.div("Transaction emitted no logs.", class_="alert alert-secondary mt-3 mb-0")
    return ui.div(f"Decoded {count} logs.", class_="alert alert-success mt-3 mb-0")
