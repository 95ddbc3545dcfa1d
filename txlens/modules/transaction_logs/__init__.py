from .ui import transaction_logs_ui, record_card_ui, status_ui
from .outputs import register_transaction_log_outputs

__all__ = [
    'transaction_logs_ui',
    'record_card_ui',
    'status_ui',
    'register_transaction_log_outputs',
]
