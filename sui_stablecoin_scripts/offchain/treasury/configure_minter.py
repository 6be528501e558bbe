"""
Configure a new minter through a temporary controller key, then hand control
of its MintCap to the final controller address.

Every step checks the remote state first so that an interrupted run can simply
be repeated.
"""
import logging

import fire

from ..util import (
    address_arg,
    build_treasury_client,
    check_signer,
    confirm_or_abort,
    log_receipt,
    to_subunits,
)
from ...ledger.errors import PreconditionError
from ...ledger.reconcile import Reconciliation, reconcile, same_address
from ...ledger.treasury_client import SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient

_LOGGER = logging.getLogger(__name__)


def configure_minter(
    treasury_client: SuiTreasuryClient,
    hot_master_minter: Ed25519Keypair,
    temp_controller: Ed25519Keypair,
    minter_address: str,
    mint_allowance,
    final_controller_address: str,
    confirm: Confirm = prompt_confirmation,
) -> str:
    # Fail before creating yet another temp controller
    final_mint_cap_id = treasury_client.get_mint_cap_id(final_controller_address)
    if final_mint_cap_id is not None:
        raise PreconditionError(
            f"Final controller is already configured with MintCap {final_mint_cap_id}"
        )

    roles = treasury_client.get_roles()
    check_signer(hot_master_minter, roles.master_minter, "master minter")

    # Step 1: temp controller / minter pair
    mint_cap_id = treasury_client.get_mint_cap_id(temp_controller.address)
    state = Reconciliation.ABSENT
    if mint_cap_id is not None:
        owner = treasury_client.get_object_owner(mint_cap_id)
        holder = owner.address or f"<{owner.kind}>"
        state = reconcile(holder, minter_address, same_address)
    if state == Reconciliation.PRESENT_MATCHING:
        _LOGGER.info(
            f"The temp controller/minter pair ({temp_controller.address}/{minter_address}) already exists. Skipping temp controller configuration..."
        )
    elif state == Reconciliation.PRESENT_CONFLICTING:
        raise PreconditionError(
            f"Temp controller was already configured, but the MintCap {mint_cap_id} is held by {holder}, not {minter_address}"
        )
    else:
        confirm_or_abort(
            confirm,
            f"Going to create a new temp controller {temp_controller.address} and transfer its MintCap to {minter_address}",
        )
        receipt = treasury_client.configure_new_controller(
            hot_master_minter, temp_controller.address, minter_address
        )
        log_receipt("configure-new-controller", receipt)
        mint_cap_id = treasury_client.get_mint_cap_id(temp_controller.address)
        _LOGGER.info(f"Created new MintCap with ID {mint_cap_id}")

    if mint_cap_id is None:
        raise PreconditionError(
            "Expected the MintCap object to exist, but could not find it."
        )

    # Step 2: mint allowance
    decimals = treasury_client.get_metadata().decimals
    allowance = to_subunits(mint_allowance, decimals)
    current_allowance = treasury_client.get_mint_allowance(mint_cap_id)
    if reconcile(current_allowance, allowance) == Reconciliation.PRESENT_MATCHING:
        _LOGGER.info(
            f"The current mint allowance is already ${mint_allowance}. Skipping mint allowance configuration..."
        )
    else:
        confirm_or_abort(
            confirm,
            f"Going to set the mint allowance to ${mint_allowance} for MintCap {mint_cap_id} currently held by {minter_address}",
        )
        receipt = treasury_client.set_mint_allowance(temp_controller, allowance)
        log_receipt("set-mint-allowance", receipt)

    # Step 3: controller rotation
    confirm_or_abort(
        confirm,
        f"Going to rotate the temp controller key from {temp_controller.address} to {final_controller_address}",
    )
    receipt = treasury_client.rotate_controller(
        hot_master_minter, final_controller_address, temp_controller.address
    )
    log_receipt("rotate-controller", receipt)

    _LOGGER.info("Mint configuration complete")
    return mint_cap_id


def main(
    hot_master_minter_key: str,
    temp_controller_key: str,
    minter_address: str,
    mint_allowance: str,
    final_controller_address: str,
    treasury_object_id: str = None,
    treasury_deploy_file: str = None,
    rpc_url: str = None,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = build_treasury_client(
        client, address_arg(treasury_object_id), treasury_deploy_file
    )
    return configure_minter(
        treasury_client,
        Ed25519Keypair.from_secret_key(hot_master_minter_key),
        Ed25519Keypair.from_secret_key(temp_controller_key),
        address_arg(minter_address),
        mint_allowance,
        address_arg(final_controller_address),
        confirm=confirmation(yes),
    )


if __name__ == "__main__":
    fire.Fire(main)
