# social_recovery/testing.py
from contextlib import contextmanager
from typing import Optional

from .exceptions.contract_errors import ContractRevert

class RevertContext:
    """Holds the revert caught by `reverts` for later inspection"""

    def __init__(self):
        self.error: Optional[ContractRevert] = None

    @property
    def revert_msg(self) -> Optional[str]:
        return self.error.revert_msg if self.error else None

@contextmanager
def reverts(revert_msg: Optional[str] = None):
    """Assert that the block reverts, optionally with an exact message.

        with reverts("Empty data"):
            wallet.execute(addr1, "0x", {"from": owner, "value": 5000})
    """
    context = RevertContext()
    try:
        yield context
    except ContractRevert as e:
        context.error = e
        if revert_msg is not None and e.revert_msg != revert_msg:
            raise AssertionError(
                f"Unexpected revert string '{e.revert_msg}', expected '{revert_msg}'"
            ) from e
    else:
        raise AssertionError("Transaction did not revert")
