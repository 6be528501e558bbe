import logging
from typing import List

import fire

from .util import log_receipt
from ..ledger.errors import PreconditionError
from ..utils.network import SuiRpcClient, check_receipt
from ..utils.output import inspect_object

_LOGGER = logging.getLogger(__name__)


def execute_transaction(
    client, tx_bytes: str, signatures: List[str] = None, dry_run: bool = False
) -> dict:
    """Dry run or submit an already built, base64 encoded TransactionData."""
    if dry_run:
        _LOGGER.info("Dry running transaction...")
        result = check_receipt(client.dry_run_transaction_block(tx_bytes))
        _LOGGER.info(inspect_object(result))
        return result

    _LOGGER.info("Executing transaction...")
    if not signatures:
        raise PreconditionError(
            "Missing required signatures for transaction execution!"
        )
    receipt = client.execute_transaction_block(tx_bytes, list(signatures))
    _LOGGER.info(inspect_object(receipt))
    log_receipt("execute-transaction", receipt)
    return receipt


def main(
    tx_bytes: str,
    signatures: List[str] = None,
    dry_run: bool = False,
    rpc_url: str = None,
):
    if isinstance(signatures, str):
        signatures = [signatures]
    return execute_transaction(SuiRpcClient(rpc_url), tx_bytes, signatures, dry_run)


if __name__ == "__main__":
    fire.Fire(main)
