# social_recovery/types/dataclasses.py
from dataclasses import dataclass
from typing import Dict, Any, Optional

@dataclass
class ExecutionContext:
    """Context for a single contract frame"""
    caller: str
    contract_address: str
    value: int = 0
    origin: Optional[str] = None
    entry_point: str = ""
    call_depth: int = 0

    def __post_init__(self):
        if self.origin is None:
            self.origin = self.caller

@dataclass
class TxParams:
    """Normalised form of a `{"from": ..., "value": ...}` transaction dict"""
    sender: str
    value: int = 0

    @classmethod
    def from_dict(cls, tx: Dict[str, Any]) -> 'TxParams':
        # local import, utils imports from types
        from ..utils.validation_utils import validate_address, validate_value

        if 'from' not in tx:
            raise ValueError("Transaction dict requires a 'from' account")
        return cls(
            sender=validate_address(tx['from']),
            value=validate_value(tx.get('value', 0))
        )
