# social_recovery/core/chain.py
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Any, Optional, List, Sequence, Type

from eth_utils import keccak, to_checksum_address

from .accounts import Accounts
from .contract import Contract, ContractProxy
from .execution_result import TransactionReceipt
from ..config.config_manager import Config
from ..types.enums import EntryPointKind
from ..types.dataclasses import ExecutionContext, TxParams
from ..exceptions.contract_errors import ContractRevert, NotPayable
from ..exceptions.chain_errors import InsufficientFundsError, UnknownContractError
from ..utils.validation_utils import validate_address, validate_value
from ..utils.serialization_utils import serialize_state, deserialize_state

logger = logging.getLogger("RecoveryWallet.Chain")

class Chain:
    """In-process ledger with atomic, serialized transactions"""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.balances: Dict[str, int] = {}
        self.nonces: Dict[str, int] = {}
        self.contracts: Dict[str, Contract] = {}
        self.tx_history: List[TransactionReceipt] = []
        self.lock = threading.RLock()
        self._events: List[Dict[str, Any]] = []
        self._snapshots: List[bytes] = []

        self.accounts = Accounts(self)
        self.accounts.create(self.config.chain.account_count)

        logger.info(f"Chain {self.config.chain.chain_id} initialized with "
                    f"{len(self.accounts)} funded accounts")

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def get_balance(self, address: Any) -> int:
        return self.balances.get(validate_address(address), 0)

    def get_nonce(self, address: Any) -> int:
        return self.nonces.get(validate_address(address), 0)

    def fund(self, address: Any, value: int) -> None:
        """Mint value to an address (test faucet)"""
        address = validate_address(address)
        with self.lock:
            self.balances[address] = self.balances.get(address, 0) + validate_value(value)

    def transfer(self, sender: Any, to: Any, value: int) -> None:
        """Move value between two addresses"""
        sender = validate_address(sender)
        to = validate_address(to)
        value = validate_value(value)
        if value == 0:
            return

        with self.lock:
            balance = self.balances.get(sender, 0)
            if balance < value:
                raise InsufficientFundsError(sender, balance, value)
            self.balances[sender] = balance - value
            self.balances[to] = self.balances.get(to, 0) + value
            logger.debug(f"Transferred {value} from {sender} to {to}")

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def _capture(self) -> bytes:
        state = {
            # msgpack integers are limited to 64 bits
            'balances': {addr: str(bal) for addr, bal in self.balances.items()},
            'nonces': self.nonces,
            'contracts': {addr: c.get_state() for addr, c in self.contracts.items()},
            'account_count': len(self.accounts)
        }
        return serialize_state(
            state,
            compression_enabled=self.config.serialization.compression_enabled,
            compression_threshold=self.config.serialization.compression_threshold
        )

    def _restore(self, blob: bytes) -> None:
        state = deserialize_state(blob)
        self.balances = {addr: int(bal) for addr, bal in state['balances'].items()}
        self.nonces = dict(state['nonces'])
        self.accounts.truncate(state['account_count'])

        # contracts deployed after the capture disappear
        for address in list(self.contracts):
            if address not in state['contracts']:
                del self.contracts[address]
        for address, contract_state in state['contracts'].items():
            self.contracts[address].set_state(contract_state)

    def snapshot(self) -> int:
        """Take a snapshot of the whole ledger, returning its id"""
        with self.lock:
            self._snapshots.append(self._capture())
            return len(self._snapshots) - 1

    def revert(self, snapshot_id: Optional[int] = None, keep: bool = True) -> None:
        """Revert to a snapshot and discard every later one.

        The target stays available for further reverts unless ``keep`` is
        False, in which case it is released as well.
        """
        with self.lock:
            if not self._snapshots:
                raise ValueError("No snapshot to revert to")
            if snapshot_id is None:
                snapshot_id = len(self._snapshots) - 1
            if not 0 <= snapshot_id < len(self._snapshots):
                raise ValueError(f"Unknown snapshot id {snapshot_id}")

            blob = self._snapshots[snapshot_id]
            del self._snapshots[snapshot_id + (1 if keep else 0):]
            self._restore(blob)
            logger.debug(f"Reverted to snapshot {snapshot_id}")

    @contextmanager
    def atomic(self):
        """All-or-nothing block: any exception restores the prior state"""
        with self.lock:
            blob = self._capture()
            events_len = len(self._events)
            try:
                yield
            except Exception:
                self._restore(blob)
                del self._events[events_len:]
                raise

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def get_contract(self, address: Any) -> Contract:
        address = validate_address(address)
        if address not in self.contracts:
            raise UnknownContractError(address)
        return self.contracts[address]

    def _contract_address(self, deployer: str, nonce: int) -> str:
        digest = keccak(bytes.fromhex(deployer[2:]) + nonce.to_bytes(32, 'big'))
        return to_checksum_address(digest[-20:])

    def deploy(self, contract_cls: Type[Contract], *args) -> ContractProxy:
        """Deploy a contract; the final argument is the tx dict"""
        if not args or not isinstance(args[-1], dict):
            raise ValueError("deploy: final argument must be a dict of transaction parameters")
        tx = TxParams.from_dict(args[-1])

        with self.lock:
            nonce = self.get_nonce(tx.sender)
            address = self._contract_address(tx.sender, nonce)
            self._check_funds(tx.sender, tx.value)
            self.nonces[tx.sender] = nonce + 1

            with self.atomic():
                contract = contract_cls(address, self)
                self.contracts[address] = contract
                self.transfer(tx.sender, address, tx.value)
                ctx = ExecutionContext(caller=tx.sender, contract_address=address,
                                       value=tx.value, entry_point='constructor')
                contract.constructor(ctx, *args[:-1])

            logger.info(f"Deployed {contract_cls.__name__} at {address} by {tx.sender}")
            return ContractProxy(self, contract)

    def emit_event(self, address: str, event_name: str, event_data: Dict[str, Any]) -> None:
        self._events.append({'address': address, 'name': event_name, 'data': event_data})
        logger.debug(f"Event {event_name} from {address}: {event_data}")

    def _check_funds(self, sender: str, value: int) -> None:
        balance = self.balances.get(sender, 0)
        if balance < value:
            raise InsufficientFundsError(sender, balance, value)

    def _txid(self, receipt: TransactionReceipt) -> str:
        encoded = serialize_state({
            'from': receipt.sender,
            'to': receipt.receiver,
            'nonce': receipt.nonce,
            'entry_point': receipt.entry_point,
            'value': str(receipt.value)
        }, compression_enabled=False)
        return '0x' + keccak(encoded).hex()

    def _run_transaction(self, sender: str, receiver: str, value: int,
                         entry_point: str, body) -> TransactionReceipt:
        """Execute body(ctx) as one atomic transaction and record a receipt"""
        with self.lock:
            self._check_funds(sender, value)
            nonce = self.get_nonce(sender)
            self.nonces[sender] = nonce + 1

            receipt = TransactionReceipt(sender=sender, receiver=receiver, value=value,
                                         entry_point=entry_point, nonce=nonce)
            receipt.txid = self._txid(receipt)
            self._events = []
            ctx = ExecutionContext(caller=sender, contract_address=receiver,
                                   value=value, entry_point=entry_point)
            try:
                with self.atomic():
                    self.transfer(sender, receiver, value)
                    receipt.return_value = body(ctx)
            except ContractRevert as e:
                if e.contract_address is None:
                    e.contract_address = receiver
                    e.method = entry_point
                receipt.mark_reverted(e)
                self.tx_history.append(receipt)
                logger.warning(f"Transaction {receipt.txid} reverted: {e.revert_msg}")
                raise

            for event in self._events:
                receipt.add_event(event['address'], event['name'], event['data'])
            self._events = []
            self.tx_history.append(receipt)
            return receipt

    def transact(self, address: Any, entry_point: str, args: Sequence[Any],
                 tx: TxParams) -> TransactionReceipt:
        """Invoke a state-changing entry point of a deployed contract"""
        contract = self.get_contract(address)
        entry, handler = contract.resolve(entry_point)
        if entry.kind != EntryPointKind.EXTERNAL:
            raise AttributeError(f"'{entry_point}' is not a state-changing entry point")

        def body(ctx: ExecutionContext):
            if ctx.value and not entry.payable:
                raise NotPayable()
            return handler(ctx, *args)

        return self._run_transaction(tx.sender, contract.address, tx.value, entry_point, body)

    def send_transaction(self, sender: Any, to: Any, value: int = 0,
                         data: bytes = b'') -> TransactionReceipt:
        """Plain transfer from an account, delivered to the fallback of contracts"""
        sender = validate_address(sender)
        to = validate_address(to)
        value = validate_value(value)

        def body(ctx: ExecutionContext):
            contract = self.contracts.get(to)
            if contract is None:
                return None
            return contract.dispatch_fallback(ctx, bytes(data))

        return self._run_transaction(sender, to, value, 'fallback', body)

    def call(self, sender: str, to: Any, data: bytes, value: int,
             parent: Optional[ExecutionContext] = None) -> Any:
        """Nested call issued by a contract; a failing callee leaves no trace"""
        to = validate_address(to)
        with self.atomic():
            self.transfer(sender, to, value)
            contract = self.contracts.get(to)
            if contract is None:
                return None

            ctx = ExecutionContext(
                caller=sender,
                contract_address=to,
                value=value,
                origin=parent.origin if parent else sender,
                entry_point='fallback',
                call_depth=parent.call_depth + 1 if parent else 1
            )
            return contract.dispatch_fallback(ctx, bytes(data))

    def call_view(self, address: Any, entry_point: str, args: Sequence[Any]) -> Any:
        """Invoke a read-only entry point"""
        contract = self.get_contract(address)
        entry, handler = contract.resolve(entry_point)
        if entry.kind != EntryPointKind.VIEW:
            raise AttributeError(f"'{entry_point}' is not a view")
        with self.lock:
            return handler(*args)

    def get_stats(self) -> Dict[str, Any]:
        with self.lock:
            return {
                'chain_id': self.config.chain.chain_id,
                'accounts': len(self.accounts),
                'contracts': len(self.contracts),
                'transactions': len(self.tx_history),
                'reverted': sum(1 for r in self.tx_history if not r.success),
                'snapshots': len(self._snapshots)
            }
