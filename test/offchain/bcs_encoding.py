"""
BCS encoders for the return values the fake ledger hands back from dev-inspect.
"""
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


def encode_u8(value: int) -> bytes:
    return bytes([value])


def encode_u64(value: int) -> bytes:
    return value.to_bytes(8, "little")


def encode_bool(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"


def encode_address(address: str) -> bytes:
    return bytes.fromhex(address[2:].rjust(64, "0"))


def encode_option(value: Optional[T], encode: Callable[[T], bytes]) -> bytes:
    if value is None:
        return b"\x00"
    return b"\x01" + encode(value)
