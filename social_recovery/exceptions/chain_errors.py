# social_recovery/exceptions/chain_errors.py
class ChainError(Exception):
    """Base class for ledger errors raised outside contract execution"""
    pass

class InsufficientFundsError(ChainError):
    """Sender balance does not cover the transferred value"""

    def __init__(self, address: str, balance: int, required: int):
        self.address = address
        self.balance = balance
        self.required = required
        super().__init__(f"Insufficient funds for {address}: balance {balance}, required {required}")

class UnknownContractError(ChainError):
    """No contract is deployed at the address"""

    def __init__(self, contract_address: str):
        self.contract_address = contract_address
        super().__init__(f"Contract not found: {contract_address}")

class InvalidAddressError(ChainError, ValueError):
    """Value cannot be interpreted as an account address"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid address: {value!r}")

class SerializationError(ChainError):
    """State could not be encoded or decoded"""
    pass

class ConfigError(Exception):
    """Configuration file could not be loaded"""

    def __init__(self, message: str, config_path: str = None):
        self.config_path = config_path
        super().__init__(f"ConfigError[{config_path or 'defaults'}]: {message}")
