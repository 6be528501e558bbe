import enum
from typing import Callable, Optional, TypeVar

T = TypeVar("T")


class Reconciliation(enum.Enum):
    """Where the remote state stands relative to what a configuration step wants."""

    ABSENT = "absent"
    PRESENT_MATCHING = "present-matching"
    PRESENT_CONFLICTING = "present-conflicting"


def reconcile(
    current: Optional[T],
    desired: T,
    matches: Optional[Callable[[T, T], bool]] = None,
) -> Reconciliation:
    if current is None:
        return Reconciliation.ABSENT
    same = matches(current, desired) if matches is not None else current == desired
    if same:
        return Reconciliation.PRESENT_MATCHING
    return Reconciliation.PRESENT_CONFLICTING


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return a is b
    return a.lower().removeprefix("0x").lstrip("0") == b.lower().removeprefix(
        "0x"
    ).lstrip("0")
