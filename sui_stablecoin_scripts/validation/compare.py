import difflib
import json
from typing import Any, Optional, Tuple

from ..ledger.errors import StateMismatchError

_MISSING = "<missing>"


def first_difference(expected: Any, actual: Any, path: str = "") -> Optional[Tuple[str, Any, Any]]:
    """Depth-first search for the first path at which the two documents differ."""
    if isinstance(expected, dict) and isinstance(actual, dict):
        for key in list(expected) + [k for k in actual if k not in expected]:
            sub_path = f"{path}.{key}" if path else str(key)
            if key not in actual:
                return sub_path, expected[key], _MISSING
            if key not in expected:
                return sub_path, _MISSING, actual[key]
            found = first_difference(expected[key], actual[key], sub_path)
            if found:
                return found
        return None
    if isinstance(expected, list) and isinstance(actual, list):
        for i, (e, a) in enumerate(zip(expected, actual)):
            found = first_difference(e, a, f"{path}[{i}]")
            if found:
                return found
        if len(expected) != len(actual):
            return path, expected, actual
        return None
    if type(expected) is not type(actual) or expected != actual:
        return path, expected, actual
    return None


def structural_diff(expected: Any, actual: Any) -> str:
    def dump(doc):
        return json.dumps(doc, indent=2, sort_keys=True).splitlines()

    return "\n".join(
        difflib.unified_diff(dump(expected), dump(actual), "expected", "actual", lineterm="")
    )


def assert_states_equal(expected: dict, actual: dict):
    found = first_difference(expected, actual)
    if found:
        path, e, a = found
        raise StateMismatchError(path, e, a, structural_diff(expected, actual))
