# social_recovery/core/accounts.py
import logging
from typing import Any, Iterator, List, Optional, Union

from eth_account import Account as EthAccount
from eth_utils import keccak

from ..utils.validation_utils import validate_address, validate_payload

logger = logging.getLogger("RecoveryWallet.Accounts")

class Account:
    """Externally owned account backed by an eth-account key pair"""

    def __init__(self, chain: Any, local_account: Any):
        self._chain = chain
        self.address = local_account.address
        self.private_key = local_account.key

    def balance(self) -> int:
        return self._chain.get_balance(self.address)

    @property
    def nonce(self) -> int:
        return self._chain.get_nonce(self.address)

    def transfer(self, to: Any, value: int = 0, data: Union[str, bytes, None] = None):
        """Send value (and optionally a payload) from this account"""
        return self._chain.send_transaction(self.address, to, value, validate_payload(data))

    def __eq__(self, other) -> bool:
        return getattr(other, 'address', other) == self.address

    def __hash__(self) -> int:
        return hash(self.address)

    def __str__(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"<Account '{self.address}'>"

class Accounts:
    """Funded accounts known to a chain"""

    def __init__(self, chain: Any):
        self._chain = chain
        self._accounts: List[Account] = []

    def _derive_key(self, index: int) -> bytes:
        chain_id = self._chain.config.chain.chain_id
        return keccak(text=f"social-recovery-{chain_id}-{index}")

    def create(self, count: int) -> List[Account]:
        """Create deterministic funded accounts"""
        created = [self.add(self._derive_key(len(self._accounts))) for _ in range(count)]
        logger.debug(f"Created {count} deterministic accounts")
        return created

    def add(self, private_key: Optional[Union[bytes, str]] = None) -> Account:
        """Add an account, generating a fresh key pair when none is given"""
        if private_key is None:
            local_account = EthAccount.create()
        else:
            local_account = EthAccount.from_key(private_key)

        account = Account(self._chain, local_account)
        if account in self._accounts:
            return self.at(account.address)

        self._accounts.append(account)
        self._chain.fund(account.address, self._chain.config.chain.initial_balance)
        return account

    def truncate(self, count: int) -> None:
        """Forget every account added after the first `count`"""
        del self._accounts[count:]

    def at(self, address: Any) -> Account:
        address = validate_address(address)
        for account in self._accounts:
            if account.address == address:
                return account
        raise KeyError(f"Unknown account {address}")

    def __getitem__(self, index: int) -> Account:
        return self._accounts[index]

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __contains__(self, item) -> bool:
        return item in self._accounts
