import logging

import fire

from ..util import address_arg, check_signer, confirm_or_abort, log_receipt
from ...ledger.errors import PreconditionError
from ...ledger.upgrade_service_client import UpgradeServiceClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def accept_upgrade_service_admin(
    upgrade_service_client: UpgradeServiceClient,
    pending_upgrade_service_admin: Ed25519Keypair,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    _LOGGER.info(f"Dry Run: {'enabled' if dry_run else 'disabled'}")

    pending = upgrade_service_client.get_pending_admin()
    if pending is None:
        raise PreconditionError(
            "There is no currently pending admin on the upgrade service."
        )
    check_signer(pending_upgrade_service_admin, pending, "pending upgrade service admin")

    admin = upgrade_service_client.get_admin()
    confirm_or_abort(
        confirm,
        f"Accepting the pending admin for UpgradeService<{upgrade_service_client.upgrade_service_otw_type}>. The admin will be updated from {admin} to {pending}",
    )
    receipt = upgrade_service_client.accept_pending_admin(
        pending_upgrade_service_admin, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("accept-upgrade-service-admin", receipt, dry_run)
    _LOGGER.info(
        "Previously pending upgrade service admin has been accepted as the new admin."
    )
    return receipt


def main(
    upgrade_service_object_id: str,
    pending_upgrade_service_admin_key: str,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    receipt = accept_upgrade_service_admin(
        UpgradeServiceClient.build_from_id(client, address_arg(upgrade_service_object_id)),
        Ed25519Keypair.from_secret_key(pending_upgrade_service_admin_key),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
