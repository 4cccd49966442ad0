# social_recovery/types/enums.py
from enum import Enum, auto

class RecoveryStatus(Enum):
    """Recovery lifecycle of a wallet"""
    NORMAL = auto()
    RECOVERY_PENDING = auto()

class EntryPointKind(Enum):
    """How a contract entry point may be invoked"""
    EXTERNAL = auto()
    VIEW = auto()
    FALLBACK = auto()

class TransactionStatus(Enum):
    """Outcome of a submitted transaction"""
    SUCCESS = 1
    REVERTED = 0
