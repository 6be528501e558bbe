import logging

import fire

from ..util import (
    address_arg,
    build_treasury_client,
    check_signer,
    confirm_or_abort,
    log_receipt,
)
from ...ledger.treasury_client import SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def set_blocklist_state(
    treasury_client: SuiTreasuryClient,
    blocklister: Ed25519Keypair,
    address: str,
    unblock: bool = False,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
):
    """
    Block or unblock ``address``. Returns None when the next-epoch state
    already matches and nothing was submitted.
    """
    blocked = not unblock
    roles = treasury_client.get_roles()
    check_signer(blocklister, roles.blocklister, "blocklister")

    if treasury_client.is_blocklisted(address, "next") == blocked:
        _LOGGER.info(
            f"Address '{address}' is already {'blocked' if blocked else 'unblocked'} for the next epoch. Skipping..."
        )
        return None

    confirm_or_abort(
        confirm, f"Going to set blocklist state for '{address}' to {blocked}..."
    )
    receipt = treasury_client.set_blocklist_state(
        blocklister, address, blocked, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("set-blocklist-state", receipt, dry_run)
    if not dry_run:
        _LOGGER.info(
            f"Address '{address}' is now {'blocked' if blocked else 'unblocked'}!"
        )
    return receipt


def main(
    address: str,
    blocklister_key: str = None,
    treasury_object_id: str = None,
    treasury_deploy_file: str = None,
    unblock: bool = False,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = build_treasury_client(
        client, address_arg(treasury_object_id), treasury_deploy_file
    )
    receipt = set_blocklist_state(
        treasury_client,
        Ed25519Keypair.from_secret_key(blocklister_key or config.BLOCKLISTER_PRIVATE_KEY),
        address_arg(address),
        unblock=unblock,
        gas_budget=gas_budget or config.GAS_BUDGET,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    if receipt is not None:
        show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
