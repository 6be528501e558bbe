import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..ledger.errors import OperationAborted, PreconditionError
from ..ledger.reconcile import same_address
from ..ledger.treasury_client import SuiTreasuryClient
from ..utils.confirm import Confirm
from ..utils.keys import Ed25519Keypair
from ..utils.output import read_transaction_output, write_json_output

_LOGGER = logging.getLogger(__name__)


def build_treasury_client(
    client,
    treasury_object_id: Optional[str] = None,
    treasury_deploy_file: Optional[str] = None,
) -> SuiTreasuryClient:
    if not treasury_object_id and not treasury_deploy_file:
        raise PreconditionError(
            "Must specify one of either treasury deploy file or object ID"
        )
    if treasury_object_id and treasury_deploy_file:
        raise PreconditionError(
            "Both treasury deploy file and object ID were specified. Please choose one."
        )
    if treasury_object_id:
        return SuiTreasuryClient.build_from_id(client, treasury_object_id)
    return SuiTreasuryClient.build_from_deployment(
        client, read_transaction_output(treasury_deploy_file)
    )


def check_signer(signer: Ed25519Keypair, expected: Optional[str], role: str):
    """Abort unless ``signer`` is the account currently holding ``role``."""
    if not same_address(signer.address, expected):
        raise PreconditionError(
            f"Incorrect {role} key, given {signer.address}, expected {expected}"
        )


def confirm_or_abort(confirm: Confirm, action: str):
    _LOGGER.info(action)
    if not confirm():
        raise OperationAborted("Terminating...")


def to_subunits(amount, decimals: int) -> int:
    """Convert a whole-unit amount (e.g. dollars) to the coin's smallest unit."""
    try:
        value = Decimal(str(amount)) * (Decimal(10) ** decimals)
    except InvalidOperation as e:
        raise PreconditionError(f"Invalid amount {amount!r}") from e
    if value != value.to_integral_value() or value < 0:
        raise PreconditionError(
            f"Amount {amount} is not representable with {decimals} decimals"
        )
    return int(value)


def log_receipt(operation: str, receipt: dict, dry_run: bool = False):
    return write_json_output(f"{operation}-dry-run" if dry_run else operation, receipt)


def address_arg(value):
    """
    Fire parses ``0x…`` flag values as integers; turn them back into a
    full-width Sui address or object id. Strings and None pass through.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return f"0x{value:064x}"
    return value
