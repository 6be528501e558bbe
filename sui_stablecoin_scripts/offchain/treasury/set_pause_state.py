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


def set_pause_state(
    treasury_client: SuiTreasuryClient,
    pauser: Ed25519Keypair,
    unpause: bool = False,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
):
    paused = not unpause
    roles = treasury_client.get_roles()
    check_signer(pauser, roles.pauser, "pauser")

    if treasury_client.is_paused("next") == paused:
        _LOGGER.info(
            f"Global pause is already {'enabled' if paused else 'disabled'} for the next epoch. Skipping..."
        )
        return None

    confirm_or_abort(confirm, f"Going to set the global pause state to {paused}...")
    receipt = treasury_client.set_paused_state(
        pauser, paused, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("set-pause-state", receipt, dry_run)
    return receipt


def main(
    pauser_key: str = None,
    treasury_object_id: str = None,
    treasury_deploy_file: str = None,
    unpause: bool = False,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = build_treasury_client(
        client, address_arg(treasury_object_id), treasury_deploy_file
    )
    receipt = set_pause_state(
        treasury_client,
        Ed25519Keypair.from_secret_key(pauser_key or config.PAUSER_PRIVATE_KEY),
        unpause=unpause,
        gas_budget=gas_budget or config.GAS_BUDGET,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    if receipt is not None:
        show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
