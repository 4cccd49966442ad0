# social_recovery/types/__init__.py
from .enums import RecoveryStatus, EntryPointKind, TransactionStatus
from .dataclasses import ExecutionContext, TxParams

__all__ = [
    'RecoveryStatus', 'EntryPointKind', 'TransactionStatus',
    'ExecutionContext', 'TxParams'
]
