"""
Minimal BCS codec for the value types returned by the stablecoin view functions.
"""
from typing import Callable, Optional, TypeVar

from .errors import UnexpectedShapeError

T = TypeVar("T")


class BcsReader:
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    def read_bytes(self, n: int) -> bytes:
        if self.pos + n > len(self.data):
            raise UnexpectedShapeError(
                f"BCS value truncated: wanted {n} bytes at offset {self.pos}, have {len(self.data) - self.pos}"
            )
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def read_u8(self) -> int:
        return self.read_bytes(1)[0]

    def read_u64(self) -> int:
        return int.from_bytes(self.read_bytes(8), "little")

    def read_bool(self) -> bool:
        b = self.read_u8()
        if b > 1:
            raise UnexpectedShapeError(f"Invalid BCS bool byte {b}")
        return b == 1

    def read_address(self) -> str:
        return "0x" + self.read_bytes(32).hex()

    def read_option(self, read: Callable[["BcsReader"], T]) -> Optional[T]:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag != 1:
            raise UnexpectedShapeError(f"Invalid BCS option tag {tag}")
        return read(self)

    def finish(self):
        if self.pos != len(self.data):
            raise UnexpectedShapeError(
                f"{len(self.data) - self.pos} trailing bytes after BCS value"
            )


def decode(data: bytes, read: Callable[[BcsReader], T]) -> T:
    reader = BcsReader(data)
    value = read(reader)
    reader.finish()
    return value


def read_u8(r: BcsReader) -> int:
    return r.read_u8()


def read_u64(r: BcsReader) -> int:
    return r.read_u64()


def read_bool(r: BcsReader) -> bool:
    return r.read_bool()


def read_address(r: BcsReader) -> str:
    return r.read_address()


def read_option_address(r: BcsReader) -> Optional[str]:
    return r.read_option(read_address)
