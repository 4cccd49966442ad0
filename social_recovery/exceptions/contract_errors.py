# social_recovery/exceptions/contract_errors.py
class ContractRevert(Exception):
    """Base class for every revert raised during contract execution"""

    def __init__(self, revert_msg: str, contract_address: str = None, method: str = None):
        self.revert_msg = revert_msg
        self.contract_address = contract_address
        self.method = method
        super().__init__(revert_msg)

    def to_dict(self) -> dict:
        return {
            'error': type(self).__name__,
            'revert_msg': self.revert_msg,
            'contract_address': self.contract_address,
            'method': self.method
        }

class Unauthorized(ContractRevert):
    """Caller does not hold the role the entry point requires"""
    pass

class EmptyData(ContractRevert):
    """Forwarded call carries no payload"""

    def __init__(self, revert_msg: str = "Empty data", **kwargs):
        super().__init__(revert_msg, **kwargs)

class AlreadyRegistered(ContractRevert):
    """Guardian is already part of the guardian set"""

    def __init__(self, revert_msg: str = "Guardian already registered", **kwargs):
        super().__init__(revert_msg, **kwargs)

class NotRegistered(ContractRevert):
    """Guardian is not part of the guardian set"""

    def __init__(self, revert_msg: str = "Guardian not registered", **kwargs):
        super().__init__(revert_msg, **kwargs)

class AlreadyOwner(ContractRevert):
    """Nominated recoverer already owns the wallet"""

    def __init__(self, revert_msg: str = "Already owner", **kwargs):
        super().__init__(revert_msg, **kwargs)

class NotPendingRecoverer(ContractRevert):
    """Claim attempted by an account other than the nominated recoverer"""

    def __init__(self, revert_msg: str = "Not pending recoverer", **kwargs):
        super().__init__(revert_msg, **kwargs)

class NoPendingRecovery(ContractRevert):
    """Cancellation attempted while no recovery is in progress"""

    def __init__(self, revert_msg: str = "No pending recovery", **kwargs):
        super().__init__(revert_msg, **kwargs)

class CallFailed(ContractRevert):
    """Forwarded call reverted or could not be funded"""

    def __init__(self, revert_msg: str = "Call failed", reason: str = None, **kwargs):
        self.reason = reason
        super().__init__(revert_msg, **kwargs)

class NotPayable(ContractRevert):
    """Value sent to an entry point that does not accept it"""

    def __init__(self, revert_msg: str = "Not payable", **kwargs):
        super().__init__(revert_msg, **kwargs)
