"""
Typed payloads for the commands of a programmable transaction block.

The ledger client translates these into the wire format; nothing here knows
about serialization.
"""
from dataclasses import dataclass, field
from typing import List, Union

DENY_LIST_OBJECT_ID = "0x403"
ZERO_ADDRESS = "0x" + "0" * 64


@dataclass(frozen=True)
class ObjectArg:
    object_id: str


@dataclass(frozen=True)
class PureArg:
    # address | id | u8 | u64 | bool | string
    type: str
    value: Union[str, int, bool]


@dataclass(frozen=True)
class ResultArg:
    """The output of an earlier command in the same transaction."""

    index: int


Argument = Union[ObjectArg, PureArg, ResultArg]


@dataclass
class MoveCall:
    target: str
    arguments: List[Argument] = field(default_factory=list)
    type_arguments: List[str] = field(default_factory=list)

    @property
    def function(self) -> str:
        return self.target.split("::")[-1]

    @property
    def module(self) -> str:
        return self.target.split("::")[-2]


@dataclass
class Publish:
    project_path: str
    with_unpublished_dependencies: bool = False


@dataclass
class TransferObjects:
    objects: List[Argument]
    recipient: str


@dataclass
class Upgrade:
    """
    Upgrade of a package whose UpgradeCap is held by an upgrade service.
    The ticket is authorized and the receipt committed through the service.
    """

    project_path: str
    package_id: str
    upgrade_service_id: str
    authorize_target: str
    commit_target: str
    type_arguments: List[str] = field(default_factory=list)
    policy: int = 0
    with_unpublished_dependencies: bool = False


Command = Union[MoveCall, Publish, TransferObjects, Upgrade]


def obj(object_id: str) -> ObjectArg:
    return ObjectArg(object_id)


def pure_address(address: str) -> PureArg:
    return PureArg("address", address)


def pure_id(object_id: str) -> PureArg:
    return PureArg("id", object_id)


def pure_u8(value: int) -> PureArg:
    return PureArg("u8", int(value))


def pure_u64(value: int) -> PureArg:
    value = int(value)
    assert 0 <= value < 2**64, f"{value} does not fit into a u64"
    return PureArg("u64", value)


def pure_bool(value: bool) -> PureArg:
    return PureArg("bool", bool(value))


def pure_string(value: str) -> PureArg:
    return PureArg("string", value)
