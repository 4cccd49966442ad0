# social_recovery/__init__.py
from .core.chain import Chain
from .core.accounts import Account, Accounts
from .core.contract import Contract, ContractProxy, external, view, fallback
from .core.execution_result import TransactionReceipt
from .core.wallet import RecoveryWallet, WalletState
from .config.config_manager import Config, ConfigManager, init_config
from .types.enums import RecoveryStatus, TransactionStatus
from .exceptions.contract_errors import (
    ContractRevert, Unauthorized, EmptyData, AlreadyRegistered,
    NotRegistered, AlreadyOwner, NotPendingRecoverer, NoPendingRecovery,
    CallFailed, NotPayable
)
from .exceptions.chain_errors import (
    ChainError, InsufficientFundsError, UnknownContractError,
    InvalidAddressError, SerializationError, ConfigError
)
from .testing import reverts

__version__ = "1.0.0"
__all__ = [
    'Chain', 'Account', 'Accounts', 'Contract', 'ContractProxy',
    'external', 'view', 'fallback', 'TransactionReceipt',
    'RecoveryWallet', 'WalletState',
    'Config', 'ConfigManager', 'init_config',
    'RecoveryStatus', 'TransactionStatus',
    'ContractRevert', 'Unauthorized', 'EmptyData', 'AlreadyRegistered',
    'NotRegistered', 'AlreadyOwner', 'NotPendingRecoverer', 'NoPendingRecovery',
    'CallFailed', 'NotPayable',
    'ChainError', 'InsufficientFundsError', 'UnknownContractError',
    'InvalidAddressError', 'SerializationError', 'ConfigError',
    'reverts'
]
