from .chain_client import ChainClient, get_chain_client
from .log_pipeline import TransactionLogPipeline, records_to_frame
from .metadata_resolver import ContractMetadataResolver
from .receipt_fetcher import fetch_receipt, fetch_logs

__all__ = [
    'ChainClient',
    'get_chain_client',
    'TransactionLogPipeline',
    'records_to_frame',
    'ContractMetadataResolver',
    'fetch_receipt',
    'fetch_logs',
]
