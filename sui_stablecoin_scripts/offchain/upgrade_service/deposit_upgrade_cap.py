import logging

import fire

from ..util import address_arg, confirm_or_abort, log_receipt
from ...ledger import decoders
from ...ledger.errors import PreconditionError
from ...ledger.reconcile import same_address
from ...ledger.type_tags import parse_struct_tag
from ...ledger.upgrade_service_client import UpgradeServiceClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx
from ...utils.output import inspect_object

_LOGGER = logging.getLogger(__name__)


def deposit_upgrade_cap(
    upgrade_service_client: UpgradeServiceClient,
    upgrade_cap_owner: Ed25519Keypair,
    upgrade_cap_object_id: str,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    _LOGGER.info(f"UpgradeCap Owner: {upgrade_cap_owner.address}")
    client = upgrade_service_client.client

    upgrade_cap = client.get_object(upgrade_cap_object_id)
    cap_tag = parse_struct_tag(decoders.object_type(upgrade_cap))
    if not cap_tag.matches("0x2", "package", "UpgradeCap"):
        raise PreconditionError(
            f"Object {upgrade_cap_object_id} is a {cap_tag}, not an UpgradeCap"
        )
    owner = decoders.decode_owner(upgrade_cap)
    if owner.kind != "address" or not same_address(owner.address, upgrade_cap_owner.address):
        raise PreconditionError(
            f"UpgradeCap {upgrade_cap_object_id} is not owned by {upgrade_cap_owner.address}"
        )

    service = client.get_object(upgrade_service_client.upgrade_service_object_id)
    confirm_or_abort(
        confirm,
        f"The following UpgradeService<T> will receive an UpgradeCap of id '{upgrade_cap_object_id}'\n"
        + inspect_object(service),
    )
    confirm_or_abort(
        confirm,
        f"The following UpgradeCap will be deposited in the UpgradeService<T> of id '{upgrade_service_client.upgrade_service_object_id}'\n"
        + inspect_object(upgrade_cap),
    )

    _LOGGER.info(
        f"Storing UpgradeCap of id '{upgrade_cap_object_id}' in UpgradeService<{upgrade_service_client.upgrade_service_otw_type}>..."
    )
    receipt = upgrade_service_client.deposit_upgrade_cap(
        upgrade_cap_owner, upgrade_cap_object_id, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("deposit-upgrade-cap", receipt, dry_run)
    return receipt


def main(
    upgrade_service_object_id: str,
    upgrade_cap_object_id: str,
    upgrade_cap_owner_key: str,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    _LOGGER.info(f"RPC URL: {client.rpc_url}")
    receipt = deposit_upgrade_cap(
        UpgradeServiceClient.build_from_id(client, address_arg(upgrade_service_object_id)),
        Ed25519Keypair.from_secret_key(upgrade_cap_owner_key),
        address_arg(upgrade_cap_object_id),
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
