from typing import List, Optional

from .errors import ObjectCountMismatchError
from .type_tags import StructTag, parse_struct_tag


def get_created_objects(
    receipt: dict,
    module: Optional[str] = None,
    name: Optional[str] = None,
    address: Optional[str] = None,
) -> List[dict]:
    """
    Created object changes of a transaction, optionally restricted to objects whose
    type is the struct ``module::name`` (any type parameters).
    """
    created = [
        c for c in receipt.get("objectChanges") or [] if c.get("type") == "created"
    ]
    if module is None and name is None:
        return created
    matching = []
    for change in created:
        tag = parse_struct_tag(change["objectType"])
        if module is not None and tag.module != module:
            continue
        if name is not None and tag.name != name:
            continue
        if address is not None and not tag.matches(address, tag.module, tag.name):
            continue
        matching.append(change)
    return matching


def get_published_packages(receipt: dict) -> List[dict]:
    return [
        c for c in receipt.get("objectChanges") or [] if c.get("type") == "published"
    ]


def single_created_object(
    receipt: dict, module: str, name: str, address: Optional[str] = None
) -> dict:
    matching = get_created_objects(receipt, module, name, address)
    if len(matching) != 1:
        raise ObjectCountMismatchError(f"created {module}::{name} object", len(matching))
    return matching[0]


def single_published_package(receipt: dict) -> dict:
    published = get_published_packages(receipt)
    if len(published) != 1:
        raise ObjectCountMismatchError("published package", len(published))
    return published[0]


def created_object_tag(change: dict) -> StructTag:
    return parse_struct_tag(change["objectType"])
