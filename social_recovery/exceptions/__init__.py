# social_recovery/exceptions/__init__.py
from .contract_errors import (
    ContractRevert, Unauthorized, EmptyData, AlreadyRegistered,
    NotRegistered, AlreadyOwner, NotPendingRecoverer, NoPendingRecovery,
    CallFailed, NotPayable
)
from .chain_errors import (
    ChainError, InsufficientFundsError, UnknownContractError,
    InvalidAddressError, SerializationError, ConfigError
)

__all__ = [
    'ContractRevert', 'Unauthorized', 'EmptyData', 'AlreadyRegistered',
    'NotRegistered', 'AlreadyOwner', 'NotPendingRecoverer', 'NoPendingRecovery',
    'CallFailed', 'NotPayable',
    'ChainError', 'InsufficientFundsError', 'UnknownContractError',
    'InvalidAddressError', 'SerializationError', 'ConfigError'
]
