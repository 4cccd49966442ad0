# social_recovery/core/wallet.py
"""
Social recovery wallet.

The wallet custodies value and forwards calls for its owner. Registered
guardians may nominate a recoverer, who then claims ownership without the
current owner's consent. One guardian vote is enough to nominate.

All state lives in a single ``WalletState``. The module-level handlers take
that struct explicitly and either apply their whole effect or raise; the
chain restores the prior state when anything raises.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Set, List

from .contract import Contract, external, view, fallback
from ..types.enums import RecoveryStatus
from ..types.dataclasses import ExecutionContext
from ..exceptions.contract_errors import (
    ContractRevert, Unauthorized, EmptyData, AlreadyRegistered, NotRegistered,
    AlreadyOwner, NotPendingRecoverer, NoPendingRecovery, CallFailed
)
from ..exceptions.chain_errors import InsufficientFundsError
from ..utils.validation_utils import (
    validate_address, validate_payload, validate_value, payload_to_hex
)
from ..utils.serialization_utils import serialize_state, deserialize_state

logger = logging.getLogger("RecoveryWallet.Core")

@dataclass
class WalletState:
    """Owner, guardian set and pending recoverer of one wallet"""
    owner: str
    guardians: Set[str] = field(default_factory=set)
    pending_recoverer: Optional[str] = None

    @property
    def status(self) -> RecoveryStatus:
        if self.pending_recoverer is None:
            return RecoveryStatus.NORMAL
        return RecoveryStatus.RECOVERY_PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'owner': self.owner,
            'guardians': sorted(self.guardians),
            'pending_recoverer': self.pending_recoverer
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WalletState':
        return cls(
            owner=data['owner'],
            guardians=set(data.get('guardians', [])),
            pending_recoverer=data.get('pending_recoverer')
        )

def require_owner(state: WalletState, ctx: ExecutionContext) -> None:
    if ctx.caller != state.owner:
        raise Unauthorized("Not owner")

def require_guardian(state: WalletState, ctx: ExecutionContext) -> None:
    if ctx.caller not in state.guardians:
        raise Unauthorized("Not guardian")

def handle_register_guardian(state: WalletState, ctx: ExecutionContext, account: Any) -> str:
    """Returns the registered guardian address"""
    require_owner(state, ctx)
    account = validate_address(account)
    if account in state.guardians:
        raise AlreadyRegistered()
    state.guardians.add(account)
    return account

def handle_deregister_guardian(state: WalletState, ctx: ExecutionContext, account: Any) -> str:
    require_owner(state, ctx)
    account = validate_address(account)
    if account not in state.guardians:
        raise NotRegistered()
    state.guardians.remove(account)
    return account

def handle_choose_recoverer(state: WalletState, ctx: ExecutionContext, candidate: Any) -> str:
    require_guardian(state, ctx)
    candidate = validate_address(candidate)
    if candidate == state.owner:
        raise AlreadyOwner()
    state.pending_recoverer = candidate
    return candidate

def handle_claim_ownership(state: WalletState, ctx: ExecutionContext) -> str:
    """Returns the previous owner"""
    # also rejects every caller while nothing is pending
    if state.pending_recoverer is None or ctx.caller != state.pending_recoverer:
        raise NotPendingRecoverer()
    previous_owner = state.owner
    state.owner = ctx.caller
    state.pending_recoverer = None
    return previous_owner

def handle_cancel_recovery(state: WalletState, ctx: ExecutionContext) -> str:
    """Returns the recoverer whose nomination was dropped"""
    require_owner(state, ctx)
    if state.pending_recoverer is None:
        raise NoPendingRecovery()
    recoverer = state.pending_recoverer
    state.pending_recoverer = None
    return recoverer

class RecoveryWallet(Contract):
    """Owned wallet with guardian-driven ownership recovery"""

    def __init__(self, address: str, chain: Any):
        super().__init__(address, chain)
        self.state: Optional[WalletState] = None

    def constructor(self, ctx: ExecutionContext) -> None:
        self.state = WalletState(owner=ctx.caller)
        logger.info(f"RecoveryWallet {self.address} created, owner {ctx.caller}")

    @external("execute", payable=True)
    def execute(self, ctx: ExecutionContext, target: Any, data: Any, value: Optional[int] = None):
        """Forward `data` plus value to `target`.

        Value attached to the transaction is already credited to the wallet;
        without an explicit `value` the attached amount is forwarded.
        """
        require_owner(self.state, ctx)
        payload = validate_payload(data)
        if not payload:
            raise EmptyData()
        target = validate_address(target)
        amount = ctx.value if value is None else validate_value(value)

        try:
            result = self.chain.call(self.address, target, payload, amount, parent=ctx)
        except (ContractRevert, InsufficientFundsError) as e:
            logger.warning(f"Forwarded call from {self.address} to {target} failed: {e}")
            raise CallFailed(reason=str(e)) from e

        self.emit("Executed", target=target, value=amount, data=payload_to_hex(payload))
        return result

    @external("registerGuardian")
    def register_guardian(self, ctx: ExecutionContext, account: Any) -> None:
        account = handle_register_guardian(self.state, ctx, account)
        self.emit("GuardianRegistered", guardian=account)
        logger.info(f"Guardian {account} registered on {self.address}")

    @external("deregisterGuardian")
    def deregister_guardian(self, ctx: ExecutionContext, account: Any) -> None:
        account = handle_deregister_guardian(self.state, ctx, account)
        self.emit("GuardianDeregistered", guardian=account)
        logger.info(f"Guardian {account} deregistered from {self.address}")

    @external("chooseRecoverer")
    def choose_recoverer(self, ctx: ExecutionContext, candidate: Any) -> None:
        candidate = handle_choose_recoverer(self.state, ctx, candidate)
        self.emit("RecovererChosen", guardian=ctx.caller, recoverer=candidate)
        logger.info(f"Guardian {ctx.caller} nominated {candidate} to recover {self.address}")

    @external("recovererClaimOwnership")
    def recoverer_claim_ownership(self, ctx: ExecutionContext) -> None:
        previous_owner = handle_claim_ownership(self.state, ctx)
        self.emit("OwnershipClaimed", previous_owner=previous_owner, new_owner=ctx.caller)
        logger.info(f"Ownership of {self.address} moved from {previous_owner} to {ctx.caller}")

    @external("cancelRecovery")
    def cancel_recovery(self, ctx: ExecutionContext) -> None:
        recoverer = handle_cancel_recovery(self.state, ctx)
        self.emit("RecoveryCancelled", recoverer=recoverer)
        logger.info(f"Recovery of {self.address} by {recoverer} cancelled")

    @fallback(payable=True)
    def receive(self, ctx: ExecutionContext, data: bytes) -> None:
        if ctx.value:
            self.emit("Received", sender=ctx.caller, value=ctx.value)

    @view("owner")
    def get_owner(self) -> str:
        return self.state.owner

    @view("isGuardian")
    def is_guardian(self, account: Any) -> bool:
        return validate_address(account) in self.state.guardians

    @view("guardians")
    def get_guardians(self) -> List[str]:
        return sorted(self.state.guardians)

    @view("pendingRecoverer")
    def get_pending_recoverer(self) -> Optional[str]:
        return self.state.pending_recoverer

    @view("recoveryStatus")
    def recovery_status(self) -> str:
        return self.state.status.name

    def get_state(self) -> Dict[str, Any]:
        return self.state.to_dict()

    def set_state(self, data: Dict[str, Any]) -> None:
        self.state = WalletState.from_dict(data)

    def export_state(self) -> bytes:
        """Encode wallet storage for persistence"""
        serialization = self.chain.config.serialization
        with self.chain.lock:
            return serialize_state(
                self.state,
                compression_enabled=serialization.compression_enabled,
                compression_threshold=serialization.compression_threshold
            )

    def import_state(self, blob: bytes) -> None:
        """Replace wallet storage with a previously exported blob"""
        state = WalletState.from_dict(deserialize_state(blob))
        with self.chain.lock:
            self.state = state
        logger.info(f"RecoveryWallet {self.address} state imported, owner {state.owner}")
