"""
Decoders from raw Sui RPC responses to typed records.

Every access to the nested field layout of a remote object lives here, so a
change to the on-chain struct layout only ever touches this module. Each
decoder checks that every field it relies on is present and raises
UnexpectedShapeError naming the missing path otherwise.
"""
import base64
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from . import bcs
from .errors import UnexpectedShapeError
from .type_tags import normalize_sui_address

T = TypeVar("T")


@dataclass
class Roles:
    owner: str
    pending_owner: Optional[str]
    master_minter: str
    blocklister: str
    pauser: str
    metadata_updater: str


@dataclass
class TreasuryFields:
    object_id: str
    controllers_table_id: str
    mint_allowances_table_id: str
    roles_bag_id: str
    compatible_versions: List[int]


@dataclass
class ObjectOwner:
    kind: str  # immutable | address | object | shared | unknown
    address: Optional[str] = None


@dataclass
class CoinMetadata:
    object_id: str
    decimals: int
    name: str
    symbol: str
    description: str
    icon_url: str


def require(data: Any, *path: str) -> Any:
    """Walk ``path`` through nested dicts, failing loudly on the first missing key."""
    current = data
    walked = []
    for key in path:
        walked.append(key)
        if not isinstance(current, dict) or key not in current:
            raise UnexpectedShapeError(f"Missing field '{'.'.join(walked)}'")
        current = current[key]
    return current


def object_data(response: dict) -> dict:
    if "error" in response and response["error"]:
        raise UnexpectedShapeError(f"Object lookup failed: {response['error']}")
    return require(response, "data")


def move_object_fields(response: dict) -> dict:
    content = require(object_data(response), "content")
    if content.get("dataType") != "moveObject":
        raise UnexpectedShapeError(
            f"Expected 'moveObject', got '{content.get('dataType')}'"
        )
    return require(content, "fields")


def object_type(response: dict) -> str:
    return require(object_data(response), "type")


def decode_treasury_fields(response: dict) -> TreasuryFields:
    fields = move_object_fields(response)
    return TreasuryFields(
        object_id=normalize_sui_address(require(fields, "id", "id")),
        controllers_table_id=require(fields, "controllers", "fields", "id", "id"),
        mint_allowances_table_id=require(
            fields, "mint_allowances", "fields", "id", "id"
        ),
        roles_bag_id=require(fields, "roles", "fields", "data", "fields", "id", "id"),
        compatible_versions=[
            int(v)
            for v in require(fields, "compatible_versions", "fields", "contents")
        ],
    )


def decode_two_step_role(response: dict) -> Tuple[str, Optional[str]]:
    value = require(move_object_fields(response), "value", "fields")
    active = require(value, "active_address")
    pending = require(value, "pending_address")
    return active, pending or None


def decode_role_address(response: dict) -> str:
    value = require(move_object_fields(response), "value")
    if not isinstance(value, str):
        raise UnexpectedShapeError(f"Expected role value to be an address, got {value!r}")
    return value


def decode_owner(response: dict) -> ObjectOwner:
    owner = object_data(response).get("owner")
    if not owner:
        return ObjectOwner("unknown")
    if owner == "Immutable":
        return ObjectOwner("immutable")
    if "AddressOwner" in owner:
        return ObjectOwner("address", owner["AddressOwner"])
    if "ObjectOwner" in owner:
        return ObjectOwner("object", owner["ObjectOwner"])
    if "Shared" in owner:
        return ObjectOwner("shared")
    return ObjectOwner("unknown")


def decode_coin_metadata(response: Optional[dict], coin_type: str) -> CoinMetadata:
    if not response:
        raise UnexpectedShapeError(
            f"Could not find metadata for coin with type {coin_type}"
        )
    return CoinMetadata(
        object_id=require(response, "id"),
        decimals=int(require(response, "decimals")),
        name=require(response, "name"),
        symbol=require(response, "symbol"),
        description=require(response, "description"),
        icon_url=response.get("iconUrl") or "",
    )


def decode_dynamic_field_key(entry: dict) -> str:
    return require(entry, "name", "value")


def decode_blocklisted_event(event: dict) -> str:
    return require(event, "parsedJson", "address")


def decode_return_values(
    response: dict, readers: List[Callable[[bcs.BcsReader], Any]]
) -> List[Any]:
    """
    Decode the return values of the last command of a dev-inspected transaction.
    The number of values must match the number of readers.
    """
    if response.get("error"):
        raise UnexpectedShapeError(f"View function failed: {response['error']}")
    results = response.get("results") or []
    if not results:
        raise UnexpectedShapeError("View function returned no results")
    return_values = results[-1].get("returnValues") or []
    if len(return_values) != len(readers):
        raise UnexpectedShapeError(
            f"Mismatch between the number of return types ({len(readers)}) and return values ({len(return_values)})"
        )
    decoded = []
    for (raw, _type), read in zip(return_values, readers):
        if isinstance(raw, str):
            raw = base64.b64decode(raw)
        decoded.append(bcs.decode(bytes(raw), read))
    return decoded


def decode_single_return_value(
    response: dict, read: Callable[[bcs.BcsReader], T]
) -> T:
    (value,) = decode_return_values(response, [read])
    return value
