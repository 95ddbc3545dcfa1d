import logging

from .modules.transaction_logs import register_transaction_log_outputs
from .services.log_pipeline import TransactionLogPipeline

logger = logging.getLogger(__name__)


def server(input, output, session):
    # One pipeline per session; it only holds the shared chain client and ABI
    pipeline = TransactionLogPipeline()
    logger.info(f"Session started, RPC endpoint {pipeline.client.rpc_url}")

    register_transaction_log_outputs(output, input, session, pipeline)
