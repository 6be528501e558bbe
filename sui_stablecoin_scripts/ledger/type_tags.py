"""
Structured parsing of Move type tags as printed by the Sui RPC.

    TypeTag   := PRIMITIVE | "vector" "<" TypeTag ">" | StructTag
    StructTag := ADDRESS "::" IDENT "::" IDENT [ "<" TypeTag { "," TypeTag } ">" ]

Addresses are normalized to their 32-byte form so that "0x2::sui::SUI" and
"0x000...002::sui::SUI" compare equal.
"""
import re
from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .errors import TypeTagParseError

PRIMITIVES = {
    "bool",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    "u256",
    "address",
    "signer",
}

_TOKEN = re.compile(r"\s*(::|<|>|,|0x[0-9a-fA-F]+|[A-Za-z_][A-Za-z0-9_]*)")
_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_HEX_ADDRESS = re.compile(r"^(0x)?[0-9a-fA-F]{1,64}$")


def normalize_sui_address(address: str) -> str:
    if not _HEX_ADDRESS.match(address):
        raise TypeTagParseError(f"Invalid Sui address '{address}'")
    if address.startswith("0x"):
        address = address[2:]
    return "0x" + address.lower().rjust(64, "0")


@dataclass(frozen=True)
class VectorTag:
    element: "TypeTag"

    def __str__(self):
        return f"vector<{self.element}>"


@dataclass(frozen=True)
class StructTag:
    address: str
    module: str
    name: str
    type_params: Tuple["TypeTag", ...] = field(default_factory=tuple)

    def __str__(self):
        base = f"{self.address}::{self.module}::{self.name}"
        if self.type_params:
            base += "<" + ", ".join(str(p) for p in self.type_params) + ">"
        return base

    @property
    def base(self) -> str:
        """The tag without its type parameters."""
        return f"{self.address}::{self.module}::{self.name}"

    def matches(self, address: str, module: str, name: str) -> bool:
        return (
            self.address == normalize_sui_address(address)
            and self.module == module
            and self.name == name
        )


TypeTag = Union[str, VectorTag, StructTag]


def _tokenize(text: str) -> List[str]:
    tokens = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        m = _TOKEN.match(stripped, pos)
        if m is None:
            raise TypeTagParseError(
                f"Unexpected character {stripped[pos]!r} at {pos} in '{text}'"
            )
        tokens.append(m.group(1))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self, expected: str = None) -> str:
        token = self.peek()
        if token is None:
            raise TypeTagParseError(f"Unexpected end of type tag '{self.text}'")
        if expected is not None and token != expected:
            raise TypeTagParseError(
                f"Expected '{expected}' but found '{token}' in '{self.text}'"
            )
        self.pos += 1
        return token

    def ident(self) -> str:
        token = self.take()
        if not _IDENT.match(token):
            raise TypeTagParseError(
                f"Expected an identifier but found '{token}' in '{self.text}'"
            )
        return token

    def type_tag(self) -> TypeTag:
        token = self.peek()
        if token in PRIMITIVES:
            self.take()
            return token
        if token == "vector":
            self.take()
            self.take("<")
            element = self.type_tag()
            self.take(">")
            return VectorTag(element)
        return self.struct_tag()

    def struct_tag(self) -> StructTag:
        address = self.take()
        if not address.startswith("0x"):
            raise TypeTagParseError(
                f"Expected an address but found '{address}' in '{self.text}'"
            )
        self.take("::")
        module = self.ident()
        self.take("::")
        name = self.ident()
        params = []
        if self.peek() == "<":
            self.take("<")
            params.append(self.type_tag())
            while self.peek() == ",":
                self.take(",")
                params.append(self.type_tag())
            self.take(">")
        return StructTag(normalize_sui_address(address), module, name, tuple(params))

    def finish(self):
        if self.peek() is not None:
            raise TypeTagParseError(
                f"Trailing input '{self.peek()}' in type tag '{self.text}'"
            )


def parse_type_tag(text: str) -> TypeTag:
    parser = _Parser(text)
    tag = parser.type_tag()
    parser.finish()
    return tag


def parse_struct_tag(text: str) -> StructTag:
    parser = _Parser(text)
    tag = parser.struct_tag()
    parser.finish()
    return tag


def single_type_param(tag: StructTag) -> TypeTag:
    if len(tag.type_params) != 1:
        raise TypeTagParseError(
            f"Expected exactly one type parameter on '{tag}', found {len(tag.type_params)}"
        )
    return tag.type_params[0]


def same_type(a: str, b: str) -> bool:
    return parse_type_tag(a) == parse_type_tag(b)
