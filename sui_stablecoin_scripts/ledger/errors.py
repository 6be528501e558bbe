from typing import Optional


class StablecoinScriptError(Exception):
    """Base class of every error raised by the operator scripts."""


class PreconditionError(StablecoinScriptError):
    """A client-side check failed; nothing was sent to the ledger."""


class OperationAborted(StablecoinScriptError):
    """The operator declined the confirmation prompt."""


class RpcError(StablecoinScriptError):
    def __init__(self, method: str, error: dict):
        self.method = method
        self.code = error.get("code")
        self.error = error
        super().__init__(f"{method} failed: {error.get('message', error)}")


class TransactionFailedError(StablecoinScriptError):
    """The ledger rejected the transaction. Keeps the receipt as returned."""

    def __init__(self, receipt: dict, error: Optional[str] = None):
        self.receipt = receipt
        self.error = error
        super().__init__(f"Transaction failed! {error or ''}".rstrip())


class UnexpectedShapeError(StablecoinScriptError):
    pass


class TypeTagParseError(UnexpectedShapeError):
    pass


class ObjectCountMismatchError(UnexpectedShapeError):
    def __init__(self, description: str, found: int):
        self.description = description
        self.found = found
        super().__init__(f"Expected exactly one {description}, found {found}")


class StateMismatchError(StablecoinScriptError):
    def __init__(self, path: str, expected, actual, diff: str = ""):
        self.path = path
        self.expected = expected
        self.actual = actual
        self.diff = diff
        message = f"State mismatch at '{path}': expected {expected!r}, got {actual!r}"
        if diff:
            message += "\n" + diff
        super().__init__(message)
