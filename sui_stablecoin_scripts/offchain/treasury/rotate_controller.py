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


def rotate_controller(
    treasury_client: SuiTreasuryClient,
    hot_master_minter: Ed25519Keypair,
    old_controller_address: str,
    new_controller_address: str,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    _LOGGER.info(f"Dry Run: {'enabled' if dry_run else 'disabled'}")

    roles = treasury_client.get_roles()
    check_signer(hot_master_minter, roles.master_minter, "master minter")

    owner = treasury_client.get_mint_cap_owner(old_controller_address)
    if owner is None:
        raise PreconditionError(
            f"Could not find Mint Cap for controller address {old_controller_address}"
        )
    confirm_or_abort(
        confirm,
        f"Going to rotate the controller from {old_controller_address} to {new_controller_address}, MintCap held by {owner.address or owner.kind}",
    )
    receipt = treasury_client.rotate_controller(
        hot_master_minter,
        new_controller_address,
        old_controller_address,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("rotate-controller", receipt, dry_run)
    return receipt


def main(
    hot_master_minter_key: str,
    old_controller_address: str,
    new_controller_address: str,
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
    receipt = rotate_controller(
        treasury_client,
        Ed25519Keypair.from_secret_key(hot_master_minter_key),
        address_arg(old_controller_address),
        address_arg(new_controller_address),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
