from dataclasses import dataclass
from typing import Optional, Union

from eth_utils import is_bytes, is_hex_address, is_integer, to_canonical_address

UINT256_MAX = 2**256 - 1
ADDRESS_LENGTH = 20


class InvalidLeafRecord(ValueError):
    """Raised when a record cannot be encoded as an (address, uint256) leaf."""


def normalize_account(account: Union[str, bytes]) -> bytes:
    """Return the 20 canonical bytes of an EVM address (checksum not enforced)."""
    if is_bytes(account):
        if len(account) != ADDRESS_LENGTH:
            raise InvalidLeafRecord(f"Account must be {ADDRESS_LENGTH} bytes, got {len(account)}")
        return bytes(account)
    if isinstance(account, str):
        value = account.strip()
        if not value.startswith(("0x", "0X")):
            value = "0x" + value
        if not is_hex_address(value):
            raise InvalidLeafRecord(f"Invalid EVM address: {account!r}")
        return to_canonical_address(value)
    raise InvalidLeafRecord(f"Unsupported account type: {type(account).__name__}")


def check_uint256(value, field_name: str) -> int:
    # bool is an int subclass; eth_utils.is_integer rejects it
    if not is_integer(value):
        raise InvalidLeafRecord(f"{field_name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise InvalidLeafRecord(f"{field_name} out of uint256 range: {value}")
    return value


@dataclass(frozen=True)
class LeafRecord:
    """One (account, amount[, index]) entry of a distribution list."""
    account: bytes
    amount: int
    index: Optional[int] = None

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "account", normalize_account(self.account))
        object.__setattr__(self, "amount", check_uint256(self.amount, "amount"))
        if self.index is not None:
            object.__setattr__(self, "index", check_uint256(self.index, "index"))

    @classmethod
    def from_value(cls, value):
        """Accept a LeafRecord or an (account, amount[, index]) tuple."""
        if isinstance(value, cls):
            return value
        if isinstance(value, (tuple, list)) and len(value) in (2, 3):
            return cls(*value)
        raise InvalidLeafRecord(f"Expected (account, amount[, index]), got {value!r}")

    @property
    def account_hex(self) -> str:
        return "0x" + self.account.hex()

    def __repr__(self):
        suffix = f", index={self.index}" if self.index is not None else ""
        return f"LeafRecord({self.account_hex}, {self.amount}{suffix})"
