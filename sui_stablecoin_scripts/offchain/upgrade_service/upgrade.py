import logging

import fire

from ..util import address_arg, check_signer, confirm_or_abort, log_receipt
from ...ledger.tx_output import single_published_package
from ...ledger.upgrade_service_client import UpgradeServiceClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.move_package import SuiCli
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def upgrade(
    upgrade_service_client: UpgradeServiceClient,
    sui_cli: SuiCli,
    package_name: str,
    admin: Ed25519Keypair,
    with_unpublished_dependencies: bool = False,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    current_admin = upgrade_service_client.get_admin()
    check_signer(admin, current_admin, "upgrade service admin")

    _LOGGER.info("Building package")
    built = sui_cli.build_package(package_name, with_unpublished_dependencies)

    # upgrades chain off the latest version, not the original package
    latest_package_id = upgrade_service_client.get_upgrade_cap_package_id()
    _LOGGER.info(
        f"Going to deploy package upgrade for {package_name} with latest packageId {latest_package_id}"
    )
    confirm_or_abort(confirm, f"Verify that package upgrade has digest {built['digest']}")

    receipt = upgrade_service_client.upgrade(
        admin,
        str(sui_cli.package_path(package_name)),
        latest_package_id,
        with_unpublished_dependencies=with_unpublished_dependencies,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("upgrade", receipt, dry_run)

    published = single_published_package(receipt)
    _LOGGER.info(f"Upgraded package published at {published['packageId']}")
    return receipt


def main(
    package_name: str,
    upgrade_service_object_id: str,
    admin_key: str,
    with_unpublished_dependencies: bool = False,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    rpc_url = rpc_url or config.RPC_URL
    client = SuiRpcClient(rpc_url)
    receipt = upgrade(
        UpgradeServiceClient.build_from_id(client, address_arg(upgrade_service_object_id)),
        SuiCli(rpc_url=rpc_url),
        package_name,
        Ed25519Keypair.from_secret_key(admin_key),
        with_unpublished_dependencies=with_unpublished_dependencies,
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
