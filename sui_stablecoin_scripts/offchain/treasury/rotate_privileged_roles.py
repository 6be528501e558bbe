"""
Owner-driven rotation of every privileged treasury role.

The single-step roles (master minter, blocklister, pauser, metadata updater)
change immediately. Ownership only gets proposed; the new owner must accept it
with accept_treasury_owner.
"""
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
from ...ledger.reconcile import Reconciliation, reconcile, same_address
from ...ledger.treasury_client import SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def rotate_privileged_roles(
    treasury_client: SuiTreasuryClient,
    treasury_owner: Ed25519Keypair,
    new_master_minter: str,
    new_blocklister: str,
    new_pauser: str,
    new_metadata_updater: str,
    new_treasury_owner: str,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    roles = treasury_client.get_roles()
    check_signer(treasury_owner, roles.owner, "treasury owner")

    propose_owner = True
    state = reconcile(roles.pending_owner, new_treasury_owner, same_address)
    if state == Reconciliation.PRESENT_CONFLICTING:
        raise PreconditionError(
            f"An ownership transfer to {roles.pending_owner} is already pending, refusing to propose {new_treasury_owner}"
        )
    if state == Reconciliation.PRESENT_MATCHING:
        _LOGGER.info(
            f"Ownership transfer to {new_treasury_owner} is already pending. Skipping ownership transfer..."
        )
        propose_owner = False
    elif same_address(roles.owner, new_treasury_owner):
        _LOGGER.info(f"{new_treasury_owner} already owns the treasury. Skipping ownership transfer...")
        propose_owner = False

    confirm_or_abort(
        confirm,
        "Going to update\n"
        f"  master minter from {roles.master_minter} to {new_master_minter}\n"
        f"  blocklister from {roles.blocklister} to {new_blocklister}\n"
        f"  pauser from {roles.pauser} to {new_pauser}\n"
        f"  metadata updater from {roles.metadata_updater} to {new_metadata_updater}\n"
        + (
            f"  and initiate ownership transfer from {roles.owner} to {new_treasury_owner}"
            if propose_owner
            else "  and keep the current ownership state"
        ),
    )
    receipt = treasury_client.rotate_privileged_roles(
        treasury_owner,
        new_master_minter,
        new_blocklister,
        new_pauser,
        new_metadata_updater,
        new_treasury_owner if propose_owner else None,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("rotate-privileged-role-key", receipt, dry_run)
    _LOGGER.info("Privileged role key rotation complete")
    return receipt


def main(
    treasury_owner_key: str,
    new_master_minter: str,
    new_blocklister: str,
    new_pauser: str,
    new_metadata_updater: str,
    new_treasury_owner: str,
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
    receipt = rotate_privileged_roles(
        treasury_client,
        Ed25519Keypair.from_secret_key(treasury_owner_key),
        address_arg(new_master_minter),
        address_arg(new_blocklister),
        address_arg(new_pauser),
        address_arg(new_metadata_updater),
        address_arg(new_treasury_owner),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
