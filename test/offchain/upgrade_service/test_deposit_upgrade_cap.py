import pytest

from offchain.fake_sui import FakeSuiClient
from offchain.util import DEFAULT_TEST_CONFIG
from sui_stablecoin_scripts.ledger.errors import PreconditionError, UnexpectedShapeError
from sui_stablecoin_scripts.ledger.upgrade_service_client import UpgradeServiceClient
from sui_stablecoin_scripts.offchain.upgrade_service.deposit_upgrade_cap import (
    deposit_upgrade_cap,
)
from sui_stablecoin_scripts.utils.confirm import always_confirm

C = DEFAULT_TEST_CONFIG


def empty_upgrade_service():
    client = FakeSuiClient()
    package_id = client.add_package()
    upgrade_cap_id = client.add_upgrade_cap(C.deployer.address, package_id)
    service_id = client.create_upgrade_service(
        C.owner.address, otw_type=f"{package_id}::stablecoin::STABLECOIN"
    )
    return client, UpgradeServiceClient.build_from_id(client, service_id), upgrade_cap_id


def test_deposit_upgrade_cap():
    client, upgrade_service_client, upgrade_cap_id = empty_upgrade_service()
    with pytest.raises(UnexpectedShapeError):
        upgrade_service_client.get_upgrade_cap_version()

    deposit_upgrade_cap(
        upgrade_service_client, C.deployer, upgrade_cap_id, confirm=always_confirm
    )
    owner = upgrade_service_client.client.get_object(upgrade_cap_id)["data"]["owner"]
    assert owner == {"ObjectOwner": upgrade_service_client.upgrade_service_object_id}
    assert upgrade_service_client.get_upgrade_cap_version() == 1
    assert upgrade_service_client.get_upgrade_cap_policy() == 0


def test_deposit_upgrade_cap_not_owned_by_signer():
    client, upgrade_service_client, upgrade_cap_id = empty_upgrade_service()
    with pytest.raises(PreconditionError, match="is not owned by"):
        deposit_upgrade_cap(
            upgrade_service_client, C.outsider, upgrade_cap_id, confirm=always_confirm
        )
    assert client.executed == []


def test_deposit_upgrade_cap_rejects_other_objects():
    client, upgrade_service_client, _ = empty_upgrade_service()
    receipt = client.create_stablecoin(C.deployer.address)
    treasury_id = next(
        c["objectId"]
        for c in receipt["objectChanges"]
        if c.get("objectType", "").split("<")[0].endswith("::treasury::Treasury")
    )
    with pytest.raises(PreconditionError, match="not an UpgradeCap"):
        deposit_upgrade_cap(
            upgrade_service_client, C.deployer, treasury_id, confirm=always_confirm
        )
