#!/usr/bin/python3

import pytest
from social_recovery import Chain, RecoveryWallet, Contract, ContractRevert
from social_recovery.core.contract import fallback, view


class Reverter(Contract):
    """Contract whose fallback always reverts"""

    @fallback(payable=True)
    def reject(self, ctx, data):
        raise ContractRevert("Rejected")

    def get_state(self):
        return {}

    def set_state(self, data):
        pass


class Recorder(Contract):
    """Contract that records every payload it receives"""

    def constructor(self, ctx):
        self.calls = []

    @fallback(payable=True)
    def record(self, ctx, data):
        self.calls.append({"sender": ctx.caller, "data": data.hex(), "value": str(ctx.value)})

    @view("calls")
    def get_calls(self):
        return list(self.calls)

    def get_state(self):
        return {"calls": self.calls}

    def set_state(self, data):
        self.calls = list(data["calls"])


@pytest.fixture(scope="module")
def chain():
    """
    Local ledger with ten funded accounts
    """
    return Chain()


@pytest.fixture(scope="function", autouse=True)
def isolate(chain):
    snapshot_id = chain.snapshot()
    yield
    chain.revert(snapshot_id, keep=False)


@pytest.fixture(scope="module")
def accounts(chain):
    return chain.accounts


@pytest.fixture(scope="module")
def owner(accounts):
    """
    The wallet deployer and initial owner
    """
    return accounts[0]


@pytest.fixture(scope="module")
def addr1(accounts):
    return accounts[1]


@pytest.fixture(scope="module")
def addr2(accounts):
    return accounts[2]


@pytest.fixture(scope="module")
def guardian(accounts):
    return accounts[3]


@pytest.fixture(scope="module")
def newOwner(accounts):
    return accounts[4]


@pytest.fixture(scope="module")
def notOwner(accounts):
    """
    Account with no role on the wallet
    """
    return accounts[5]


@pytest.fixture(scope="module")
def recoveryWallet(chain, owner):
    """
    Deploy RecoveryWallet contract
    """
    return chain.deploy(RecoveryWallet, {"from": owner})


@pytest.fixture(scope="module")
def reverter(chain, owner):
    return chain.deploy(Reverter, {"from": owner})


@pytest.fixture(scope="module")
def recorder(chain, owner):
    return chain.deploy(Recorder, {"from": owner})
