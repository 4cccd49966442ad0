#!/usr/bin/python3

import pytest
from social_recovery import (
    Chain, RecoveryWallet, reverts, InsufficientFundsError,
    UnknownContractError, TransactionStatus,
)
from social_recovery.config import Config

INITIAL_BALANCE = 10**22


def test_accounts_funded(chain, accounts):
    assert len(accounts) == 10
    for account in accounts:
        assert account.balance() == INITIAL_BALANCE
    assert len({account.address for account in accounts}) == 10


def test_accounts_deterministic(accounts):
    other = Chain()
    assert [a.address for a in other.accounts] == [a.address for a in accounts]


def test_add_account(chain, accounts):
    account = accounts.add()
    assert account in accounts
    assert account.balance() == INITIAL_BALANCE
    assert accounts.at(account.address.lower()) is account
    # adding a known key returns the existing account
    assert accounts.add(account.private_key) is account


def test_transfer(chain, addr1, addr2):
    tx = addr1.transfer(addr2, 1000)

    assert tx.success
    assert tx.return_value is None
    assert addr1.balance() == INITIAL_BALANCE - 1000
    assert addr2.balance() == INITIAL_BALANCE + 1000
    assert addr1.nonce == 1


def test_transfer_insufficient_funds(chain, addr1, addr2):
    with pytest.raises(InsufficientFundsError):
        addr1.transfer(addr2, INITIAL_BALANCE + 1)
    with pytest.raises(InsufficientFundsError):
        chain.transfer(addr1, addr2, INITIAL_BALANCE + 1)
    with pytest.raises(ValueError):
        chain.transfer(addr1, addr2, -1)

    assert addr1.balance() == INITIAL_BALANCE
    assert addr1.nonce == 0


def test_snapshot_revert(chain, owner, addr1):
    snapshot_id = chain.snapshot()
    addr1.transfer(owner, 500)
    wallet = chain.deploy(RecoveryWallet, {"from": owner})
    assert wallet.address in chain.contracts

    chain.revert(snapshot_id)
    assert addr1.balance() == INITIAL_BALANCE
    assert owner.balance() == INITIAL_BALANCE
    assert wallet.address not in chain.contracts
    with pytest.raises(UnknownContractError):
        chain.get_contract(wallet.address)


def test_revert_drops_added_accounts(chain, accounts):
    snapshot_id = chain.snapshot()
    extra = accounts.add()
    assert len(accounts) == 11

    chain.revert(snapshot_id)
    assert len(accounts) == 10
    assert extra not in accounts
    assert chain.get_balance(extra) == 0
    with pytest.raises(KeyError):
        accounts.at(extra.address)


def test_atomic_drops_added_accounts(chain, accounts):
    with pytest.raises(RuntimeError):
        with chain.atomic():
            accounts.add()
            raise RuntimeError("abort")

    assert len(accounts) == 10


def test_revert_releases_snapshot(chain, addr1, addr2):
    depth = len(chain._snapshots)
    for _ in range(3):
        snapshot_id = chain.snapshot()
        addr1.transfer(addr2, 10)
        chain.revert(snapshot_id, keep=False)

    assert len(chain._snapshots) == depth
    assert addr1.balance() == INITIAL_BALANCE

    # a kept snapshot can be reverted to twice
    snapshot_id = chain.snapshot()
    addr1.transfer(addr2, 10)
    chain.revert(snapshot_id)
    addr1.transfer(addr2, 20)
    chain.revert(snapshot_id)
    assert addr1.balance() == INITIAL_BALANCE
    assert len(chain._snapshots) == depth + 1


def test_revert_without_snapshot():
    with pytest.raises(ValueError):
        Chain().revert()


def test_reverted_transaction_rolls_back(
    chain, recoveryWallet, owner, guardian, addr1
):
    recoveryWallet.registerGuardian(guardian, {"from": owner})
    nonce = owner.nonce

    with reverts("Empty data"):
        recoveryWallet.execute(addr1, "0x", {"from": owner, "value": 5000})

    receipt = chain.tx_history[-1]
    assert receipt.status == TransactionStatus.REVERTED
    assert receipt.revert_msg == "Empty data"
    assert receipt.revert_type == "EmptyData"
    assert receipt.events == []
    # nonce advances even though the transaction reverted
    assert owner.nonce == nonce + 1
    assert owner.balance() == INITIAL_BALANCE
    assert recoveryWallet.guardians() == [guardian.address]


def test_atomic(chain, addr1, addr2):
    with pytest.raises(RuntimeError):
        with chain.atomic():
            chain.transfer(addr1, addr2, 100)
            raise RuntimeError("abort")

    assert addr1.balance() == INITIAL_BALANCE
    assert addr2.balance() == INITIAL_BALANCE


def test_deploy(chain, owner):
    first = chain.deploy(RecoveryWallet, {"from": owner})
    second = chain.deploy(RecoveryWallet, {"from": owner})

    assert first.address != second.address
    assert first.owner() == owner.address
    assert second.guardians() == []
    assert second.recoveryStatus() == "NORMAL"


def test_deploy_with_value(chain, owner):
    wallet = chain.deploy(RecoveryWallet, {"from": owner, "value": 1234})
    assert wallet.balance() == 1234
    assert owner.balance() == INITIAL_BALANCE - 1234


def test_tx_dict_required(recoveryWallet, owner, guardian):
    with pytest.raises(ValueError):
        recoveryWallet.registerGuardian(guardian)
    with pytest.raises(ValueError):
        recoveryWallet.registerGuardian(guardian, {"value": 0})
    with pytest.raises(ValueError):
        recoveryWallet.registerGuardian(guardian, {"from": owner, "value": -1})
    assert not recoveryWallet.isGuardian(guardian)


def test_unknown_entry_point(recoveryWallet):
    with pytest.raises(AttributeError):
        recoveryWallet.transferOwnership
    with pytest.raises(AttributeError):
        recoveryWallet.fallback


def test_receipt(chain, recoveryWallet, owner, addr1):
    tx = recoveryWallet.execute(addr1, "0x11ab", {"from": owner, "value": 5})

    assert tx.txid.startswith("0x") and len(tx.txid) == 66
    assert tx.entry_point == "execute"
    assert tx.sender == owner.address
    assert tx.receiver == recoveryWallet.address
    data = tx.to_dict()
    assert data["value"] == "5"
    assert data["status"] == 1
    assert '"entry_point": "execute"' in tx.to_json()


def test_reverts_helper(recoveryWallet, owner, addr1):
    with pytest.raises(AssertionError):
        with reverts("Something else"):
            recoveryWallet.execute(addr1, "0x", {"from": owner})
    with pytest.raises(AssertionError):
        with reverts():
            recoveryWallet.execute(addr1, "0x01", {"from": owner})


def test_chain_config():
    config = Config()
    config.chain.account_count = 3
    config.chain.initial_balance = 100
    small = Chain(config)

    assert len(small.accounts) == 3
    assert small.accounts[0].balance() == 100
    assert small.get_stats()["accounts"] == 3
