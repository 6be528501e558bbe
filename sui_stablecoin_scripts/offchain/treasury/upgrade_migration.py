import logging

import fire

from ..util import (
    address_arg,
    build_treasury_client,
    check_signer,
    confirm_or_abort,
    log_receipt,
)
from ...ledger.errors import PreconditionError, StateMismatchError
from ...ledger.treasury_client import MIGRATION_ACTIONS, SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)

# start opens a second compatible version, abort and complete close it again
EXPECTED_VERSION_COUNT = {"start": 2, "abort": 1, "complete": 1}


def upgrade_migration(
    treasury_client: SuiTreasuryClient,
    action: str,
    new_stablecoin_package_id: str,
    owner: Ed25519Keypair,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    if action not in MIGRATION_ACTIONS:
        raise PreconditionError(
            f"Upgrade migration action must be one of {list(MIGRATION_ACTIONS)}, got '{action}'"
        )
    _LOGGER.info(f"Executing migration step {action}")

    roles = treasury_client.get_roles()
    check_signer(owner, roles.owner, "treasury owner")

    before = treasury_client.get_compatible_versions()
    _LOGGER.info(f"Compatible versions before {action}: {before}")

    confirm_or_abort(confirm, f"Going to run {action}_migration")
    receipt = treasury_client.upgrade_migration(
        owner,
        action,
        new_stablecoin_package_id,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("upgrade-migration", receipt, dry_run)
    if dry_run:
        return receipt

    after = treasury_client.get_compatible_versions()
    if len(after) != EXPECTED_VERSION_COUNT[action]:
        raise StateMismatchError(
            "compatibleVersions",
            f"{EXPECTED_VERSION_COUNT[action]} versions",
            after,
        )
    _LOGGER.info(f"Migration step {action} executed, compatible versions: {after}")
    return receipt


def main(
    action: str,
    new_stablecoin_package_id: str,
    owner_key: str,
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
    receipt = upgrade_migration(
        treasury_client,
        action,
        address_arg(new_stablecoin_package_id),
        Ed25519Keypair.from_secret_key(owner_key),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
