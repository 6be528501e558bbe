import logging

import fire

from ..util import (
    address_arg,
    build_treasury_client,
    check_signer,
    confirm_or_abort,
    log_receipt,
)
from ...ledger.errors import PreconditionError
from ...ledger.treasury_client import SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def accept_treasury_owner(
    treasury_client: SuiTreasuryClient,
    pending_owner: Ed25519Keypair,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    roles = treasury_client.get_roles()
    if roles.pending_owner is None:
        raise PreconditionError("There is no pending treasury owner")
    check_signer(pending_owner, roles.pending_owner, "pending treasury owner")

    confirm_or_abort(
        confirm,
        f"Going to accept ownership transfer from {roles.owner} to {roles.pending_owner}",
    )
    receipt = treasury_client.accept_treasury_owner(
        pending_owner, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("accept-treasury-owner", receipt, dry_run)
    _LOGGER.info("New treasury owner accepted")
    return receipt


def main(
    pending_owner_key: str,
    treasury_object_id: str = None,
    treasury_deploy_file: str = None,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = build_treasury_client(
        client, address_arg(treasury_object_id), treasury_deploy_file
    )
    receipt = accept_treasury_owner(
        treasury_client,
        Ed25519Keypair.from_secret_key(pending_owner_key),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
