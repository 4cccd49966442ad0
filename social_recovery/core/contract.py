# social_recovery/core/contract.py
import inspect
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional, Callable, Tuple

from ..types.enums import EntryPointKind
from ..types.dataclasses import ExecutionContext, TxParams
from ..exceptions.contract_errors import NotPayable

logger = logging.getLogger("RecoveryWallet.Contract")

@dataclass(frozen=True)
class EntryPoint:
    """Externally callable member of a contract"""
    name: str
    kind: EntryPointKind
    payable: bool = False

def external(name: Optional[str] = None, payable: bool = False):
    """Mark a method as a state-changing entry point.

    The method is called as ``method(ctx, *args)`` inside a transaction.
    """
    def decorator(func):
        func._entry_point = EntryPoint(name or func.__name__, EntryPointKind.EXTERNAL, payable)
        return func
    return decorator

def view(name: Optional[str] = None):
    """Mark a method as a read-only entry point called without a transaction"""
    def decorator(func):
        func._entry_point = EntryPoint(name or func.__name__, EntryPointKind.VIEW)
        return func
    return decorator

def fallback(payable: bool = False):
    """Mark the method receiving plain transfers and unmatched payloads"""
    def decorator(func):
        func._entry_point = EntryPoint("fallback", EntryPointKind.FALLBACK, payable)
        return func
    return decorator

class Contract:
    """Base class for contracts deployed on a Chain"""

    def __init__(self, address: str, chain: Any):
        self.address = address
        self.chain = chain

    def constructor(self, ctx: ExecutionContext, *args) -> None:
        """Runs once at deployment with the deployer as ctx.caller"""
        pass

    @classmethod
    def entry_points(cls) -> Dict[str, Tuple[EntryPoint, str]]:
        """Map external name -> (EntryPoint, attribute name)"""
        cached = cls.__dict__.get('_entry_point_table')
        if cached is not None:
            return cached

        table = {}
        for attr, member in inspect.getmembers(cls, inspect.isfunction):
            entry = getattr(member, '_entry_point', None)
            if entry is not None:
                table[entry.name] = (entry, attr)
        cls._entry_point_table = table
        return table

    def resolve(self, name: str) -> Tuple[EntryPoint, Callable]:
        table = self.entry_points()
        if name not in table:
            raise AttributeError(f"{type(self).__name__} has no entry point '{name}'")
        entry, attr = table[name]
        return entry, getattr(self, attr)

    def dispatch_fallback(self, ctx: ExecutionContext, data: bytes) -> Any:
        """Deliver a plain transfer or opaque payload to the fallback"""
        table = self.entry_points()
        if 'fallback' not in table:
            if ctx.value:
                raise NotPayable(contract_address=self.address, method='fallback')
            return None
        entry, handler = self.resolve('fallback')
        if ctx.value and not entry.payable:
            raise NotPayable(contract_address=self.address, method='fallback')
        return handler(ctx, data)

    def emit(self, event_name: str, **event_data) -> None:
        """Record an event on the transaction currently executing"""
        self.chain.emit_event(self.address, event_name, event_data)

    def get_state(self) -> Dict[str, Any]:
        """Serializable snapshot of contract storage"""
        raise NotImplementedError

    def set_state(self, data: Dict[str, Any]) -> None:
        """Restore contract storage from get_state() output"""
        raise NotImplementedError

    def get_balance(self) -> int:
        return self.chain.get_balance(self.address)

class ContractTx:
    """Bound state-changing entry point; last argument is the tx dict"""

    def __init__(self, proxy: 'ContractProxy', name: str):
        self._proxy = proxy
        self._name = name

    def __call__(self, *args):
        if not args or not isinstance(args[-1], dict):
            raise ValueError(
                f"{self._name}: final argument must be a dict of transaction parameters"
            )
        tx = TxParams.from_dict(args[-1])
        return self._proxy._chain.transact(self._proxy.address, self._name, args[:-1], tx)

    def __repr__(self) -> str:
        return f"<ContractTx '{self._name}'>"

class ContractProxy:
    """Call surface of a deployed contract, one attribute per entry point"""

    def __init__(self, chain: Any, contract: Contract):
        self._chain = chain
        self._contract = contract
        self.address = contract.address

    def __getattr__(self, name: str):
        # avoid recursion before __init__ has run
        if name.startswith('_'):
            raise AttributeError(name)

        table = self._contract.entry_points()
        if name not in table or table[name][0].kind == EntryPointKind.FALLBACK:
            raise AttributeError(f"Contract has no entry point '{name}'")

        entry, attr = table[name]
        if entry.kind == EntryPointKind.VIEW:
            return lambda *args: self._chain.call_view(self.address, name, args)
        return ContractTx(self, name)

    def balance(self) -> int:
        return self._chain.get_balance(self.address)

    def __eq__(self, other) -> bool:
        return getattr(other, 'address', other) == self.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"<{type(self._contract).__name__} '{self.address}'>"

__all__ = [
    'EntryPoint', 'external', 'view', 'fallback',
    'Contract', 'ContractTx', 'ContractProxy'
]
