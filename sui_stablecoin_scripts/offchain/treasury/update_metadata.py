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


def update_metadata(
    treasury_client: SuiTreasuryClient,
    metadata_updater: Ed25519Keypair,
    name: str = None,
    symbol: str = None,
    description: str = None,
    icon_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    """Update the coin metadata. Fields left as None keep their current value."""
    roles = treasury_client.get_roles()
    check_signer(metadata_updater, roles.metadata_updater, "metadata updater")

    current = treasury_client.get_metadata()
    name = current.name if name is None else name
    symbol = current.symbol if symbol is None else symbol
    description = current.description if description is None else description
    icon_url = current.icon_url if icon_url is None else icon_url

    confirm_or_abort(
        confirm,
        f"Going to update metadata {current.object_id} to name='{name}' symbol='{symbol}' description='{description}' icon_url='{icon_url}'",
    )
    receipt = treasury_client.update_metadata(
        metadata_updater,
        name,
        symbol,
        description,
        icon_url,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("update-metadata", receipt, dry_run)
    return receipt


def main(
    metadata_updater_key: str,
    name: str = None,
    symbol: str = None,
    description: str = None,
    icon_url: str = None,
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
    receipt = update_metadata(
        treasury_client,
        Ed25519Keypair.from_secret_key(metadata_updater_key),
        name,
        symbol,
        description,
        icon_url,
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
