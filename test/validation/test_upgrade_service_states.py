import json
import logging

import pytest

from offchain.util import DEFAULT_TEST_CONFIG, setup_upgrade_service
from sui_stablecoin_scripts.ledger.errors import StateMismatchError
from sui_stablecoin_scripts.validation import upgrade_service_states
from sui_stablecoin_scripts.validation.schemas import UpgradeServiceStates
from sui_stablecoin_scripts.validation.upgrade_service_states import (
    validate_upgrade_service_states,
)

C = DEFAULT_TEST_CONFIG


def expected_states(treasury_client, upgrade_service_client) -> dict:
    return {
        "suiExtensionsPackageId": upgrade_service_client.sui_extensions_package_id,
        "upgradeServiceOtwType": f"{treasury_client.stablecoin_package_id}::stablecoin::STABLECOIN",
        "admin": C.owner.address,
        "pendingAdmin": "",
        "upgradeCapPackageId": treasury_client.stablecoin_package_id,
        "upgradeCapVersion": "1",
        "upgradeCapPolicy": 0,
    }


def test_matching_states(caplog):
    caplog.set_level(logging.INFO)
    _, treasury_client, upgrade_service_client = setup_upgrade_service()
    expected = UpgradeServiceStates.model_validate(
        expected_states(treasury_client, upgrade_service_client)
    )
    validate_upgrade_service_states(upgrade_service_client, expected)
    assert "Verify Upgrade Service States Done" in caplog.text


def test_pending_admin():
    _, treasury_client, upgrade_service_client = setup_upgrade_service()
    upgrade_service_client.change_admin(C.owner, C.new_owner.address)
    document = expected_states(treasury_client, upgrade_service_client)

    with pytest.raises(StateMismatchError) as e:
        validate_upgrade_service_states(
            upgrade_service_client, UpgradeServiceStates.model_validate(document)
        )
    assert e.value.path == "pendingAdmin"
    assert e.value.actual == C.new_owner.address

    document["pendingAdmin"] = C.new_owner.address
    validate_upgrade_service_states(
        upgrade_service_client, UpgradeServiceStates.model_validate(document)
    )


def test_main_reads_json(tmp_path, monkeypatch):
    client, treasury_client, upgrade_service_client = setup_upgrade_service()
    document = expected_states(treasury_client, upgrade_service_client)
    document["upgradeCapPolicy"] = 128
    path = tmp_path / "upgrade-service-states.json"
    path.write_text(json.dumps(document))
    monkeypatch.setattr(upgrade_service_states, "SuiRpcClient", lambda rpc_url: client)

    with pytest.raises(StateMismatchError) as e:
        upgrade_service_states.main(upgrade_service_client.upgrade_service_object_id, str(path))
    assert (e.value.path, e.value.expected, e.value.actual) == ("upgradeCapPolicy", 128, 0)
