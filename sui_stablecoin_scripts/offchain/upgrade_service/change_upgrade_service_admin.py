import logging

import fire

from ..util import address_arg, check_signer, confirm_or_abort, log_receipt
from ...ledger.errors import PreconditionError
from ...ledger.reconcile import Reconciliation, reconcile, same_address
from ...ledger.upgrade_service_client import UpgradeServiceClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def change_upgrade_service_admin(
    upgrade_service_client: UpgradeServiceClient,
    upgrade_service_admin: Ed25519Keypair,
    new_upgrade_service_admin: str,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
):
    """
    Propose ``new_upgrade_service_admin``. Returns None without submitting when
    that address is already the pending admin.
    """
    _LOGGER.info(f"Dry Run: {'enabled' if dry_run else 'disabled'}")

    admin = upgrade_service_client.get_admin()
    check_signer(upgrade_service_admin, admin, "upgrade service admin")

    pending = upgrade_service_client.get_pending_admin()
    state = reconcile(pending, new_upgrade_service_admin, same_address)
    if state == Reconciliation.PRESENT_MATCHING:
        _LOGGER.info(
            f"{new_upgrade_service_admin} is already the pending admin. Skipping..."
        )
        return None
    if state == Reconciliation.PRESENT_CONFLICTING:
        raise PreconditionError(
            f"An admin transfer to {pending} is already pending, refusing to propose {new_upgrade_service_admin}"
        )

    confirm_or_abort(
        confirm,
        f"Initiating admin transfer for UpgradeService<{upgrade_service_client.upgrade_service_otw_type}> from {admin} to {new_upgrade_service_admin}",
    )
    receipt = upgrade_service_client.change_admin(
        upgrade_service_admin,
        new_upgrade_service_admin,
        gas_budget=gas_budget,
        dry_run=dry_run,
    )
    log_receipt("change-upgrade-service-admin", receipt, dry_run)
    _LOGGER.info("Upgrade service admin change complete")
    return receipt


def main(
    upgrade_service_object_id: str,
    upgrade_service_admin_key: str,
    new_upgrade_service_admin: str,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    receipt = change_upgrade_service_admin(
        UpgradeServiceClient.build_from_id(client, address_arg(upgrade_service_object_id)),
        Ed25519Keypair.from_secret_key(upgrade_service_admin_key),
        address_arg(new_upgrade_service_admin),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    if receipt is not None:
        show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
