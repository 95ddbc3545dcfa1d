"""
Transaction Logs Server Outputs

Runs the log pipeline when the Decode button is pressed and renders
the status line, the summary table and the per-log cards.
"""

from shiny import reactive, render, ui
import logging

from ...config.blockchain_config import TX_HASH_LENGTH
from ...services.decoders.base import PipelineResult, is_valid_tx_hash
from ...services.log_pipeline import TransactionLogPipeline, records_to_frame
from .ui import record_card_ui, status_ui

logger = logging.getLogger(__name__)


def register_transaction_log_outputs(output, input, session, pipeline: TransactionLogPipeline):
    """
    Register server outputs for the transaction log page.

    Args:
        output: Shiny output object
        input: Shiny input object
        session: Shiny session object
        pipeline: shared TransactionLogPipeline
    """

    @reactive.calc
    @reactive.event(input.decode_tx)
    async def pipeline_result() -> PipelineResult:
        tx_hash = input.tx_hash().strip()
        if not is_valid_tx_hash(tx_hash):
            logger.info(f"Rejected malformed transaction hash: {tx_hash!r}")
            return PipelineResult(
                tx_hash=tx_hash,
                fetch_error=f"Invalid transaction hash: expected 0x followed by {TX_HASH_LENGTH - 2} hex characters",
            )

        with ui.Progress(min=0, max=1) as progress:
            progress.set(message="Decoding transaction logs...", value=0)
            result = await pipeline.process_detailed(tx_hash)
            progress.set(value=1)
        return result

    @output
    @render.ui
    async def decode_status():
        return status_ui(await pipeline_result())

    @output
    @render.data_frame
    async def records_table():
        result = await pipeline_result()
        return render.DataGrid(records_to_frame(result.records), width="100%")

    @output
    @render.ui
    async def record_cards():
        result = await pipeline_result()
        if not result.records:
            return ui.div()
        return ui.div(*[record_card_ui(i, record) for i, record in enumerate(result.records)])
