# social_recovery/core/__init__.py
from .contract import Contract, ContractProxy, external, view, fallback
from .execution_result import TransactionReceipt
from .accounts import Account, Accounts
from .chain import Chain
from .wallet import RecoveryWallet, WalletState

__all__ = [
    'Contract', 'ContractProxy', 'external', 'view', 'fallback',
    'TransactionReceipt', 'Account', 'Accounts', 'Chain',
    'RecoveryWallet', 'WalletState'
]
