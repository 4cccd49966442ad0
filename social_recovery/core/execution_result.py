# social_recovery/core/execution_result.py
import time
import json
from typing import Any, Optional, Dict, List
from dataclasses import dataclass, field

from ..types.enums import TransactionStatus

@dataclass
class TransactionReceipt:
    """Result of a transaction submitted to the chain"""
    sender: str
    receiver: str
    value: int = 0
    entry_point: str = ""
    nonce: int = 0
    status: TransactionStatus = TransactionStatus.SUCCESS
    return_value: Any = None
    revert_msg: Optional[str] = None
    revert_type: Optional[str] = None
    events: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)
    txid: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == TransactionStatus.SUCCESS

    def mark_reverted(self, error: Exception) -> None:
        self.status = TransactionStatus.REVERTED
        self.revert_msg = getattr(error, 'revert_msg', str(error))
        self.revert_type = type(error).__name__
        self.events = []

    def add_event(self, address: str, event_name: str, event_data: Dict[str, Any]) -> None:
        """Add an emitted event"""
        self.events.append({
            'name': event_name,
            'address': address,
            'data': event_data
        })

    def events_named(self, event_name: str) -> List[Dict[str, Any]]:
        return [e['data'] for e in self.events if e['name'] == event_name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'txid': self.txid,
            'sender': self.sender,
            'receiver': self.receiver,
            # balances can exceed 64 bits
            'value': str(self.value),
            'entry_point': self.entry_point,
            'nonce': self.nonce,
            'status': self.status.value,
            'return_value': self.return_value,
            'revert_msg': self.revert_msg,
            'revert_type': self.revert_type,
            'events': self.events,
            'timestamp': self.timestamp
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str, indent=2)
