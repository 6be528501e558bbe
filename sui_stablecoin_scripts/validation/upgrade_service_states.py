import logging

import fire

from .compare import assert_states_equal
from .schemas import UpgradeServiceStates, load_document
from ..ledger.upgrade_service_client import UpgradeServiceClient
from ..offchain.util import address_arg
from ..utils import config
from ..utils.network import SuiRpcClient

_LOGGER = logging.getLogger(__name__)


def get_actual_states(upgrade_service_client: UpgradeServiceClient) -> dict:
    return {
        "suiExtensionsPackageId": upgrade_service_client.sui_extensions_package_id,
        "upgradeServiceOtwType": upgrade_service_client.upgrade_service_otw_type,
        "admin": upgrade_service_client.get_admin(),
        "pendingAdmin": upgrade_service_client.get_pending_admin() or "",
        "upgradeCapPackageId": upgrade_service_client.get_upgrade_cap_package_id(),
        "upgradeCapVersion": str(upgrade_service_client.get_upgrade_cap_version()),
        "upgradeCapPolicy": upgrade_service_client.get_upgrade_cap_policy(),
    }


def validate_upgrade_service_states(
    upgrade_service_client: UpgradeServiceClient, expected: UpgradeServiceStates
):
    assert_states_equal(
        expected.model_dump(by_alias=True), get_actual_states(upgrade_service_client)
    )
    _LOGGER.info("Verify Upgrade Service States Done")


def main(upgrade_service_object_id: str, config_file: str, rpc_url: str = None):
    expected = UpgradeServiceStates.model_validate(load_document(config_file))
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    upgrade_service_client = UpgradeServiceClient.build_from_id(
        client, address_arg(upgrade_service_object_id)
    )
    validate_upgrade_service_states(upgrade_service_client, expected)


if __name__ == "__main__":
    fire.Fire(main)
