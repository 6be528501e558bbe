import logging

import pytest
import yaml
from pydantic import ValidationError

from offchain.util import DEFAULT_TEST_CONFIG, setup_minter, setup_treasury
from sui_stablecoin_scripts.ledger.errors import StateMismatchError
from sui_stablecoin_scripts.validation import treasury_states
from sui_stablecoin_scripts.validation.schemas import TreasuryStatesFile
from sui_stablecoin_scripts.validation.treasury_states import validate_treasury_states

C = DEFAULT_TEST_CONFIG


@pytest.fixture
def deployment():
    client, treasury_client, _ = setup_treasury()
    mint_cap_id = setup_minter(treasury_client)
    treasury_client.set_blocklist_state(C.blocklister, C.outsider.address, True)
    treasury_client.set_blocklist_state(C.blocklister, C.recipient.address, True)
    # blocklisted once, then released again
    treasury_client.set_blocklist_state(C.blocklister, C.new_owner.address, True)
    treasury_client.set_blocklist_state(C.blocklister, C.new_owner.address, False)
    return client, treasury_client, mint_cap_id


def expected_document(treasury_client, mint_cap_id) -> dict:
    treasury = treasury_client.client.treasury(treasury_client.treasury_object_id)
    return {
        "treasuryObjectId": treasury_client.treasury_object_id,
        "expectedStates": {
            "stablecoinPackageId": treasury.package_id,
            "coinType": treasury.coin_type,
            "controllers": {C.final_controller.address: {"mintCapId": mint_cap_id}},
            "mintAllowances": {
                mint_cap_id: {"minter": C.minter.address, "allowance": "1000000000000"}
            },
            "roles": {
                "owner": C.owner.address,
                "pendingOwner": "",
                "masterMinter": C.master_minter.address,
                "blocklister": C.blocklister.address,
                "pauser": C.pauser.address,
                "metadataUpdater": C.metadata_updater.address,
            },
            "totalSupply": "0",
            "pauseState": {"current": "false", "next": "false"},
            "metadata": {
                "id": treasury.metadata_id,
                "decimals": "6",
                "name": "USDC",
                "symbol": "USDC",
                "description": "US Dollar backed stablecoin",
                "iconUrl": "https://www.example.com/usdc.png",
            },
            "compatibleVersions": ["1"],
            "blocklist": [C.outsider.address, C.recipient.address],
        },
    }


def validate(treasury_client, document: dict):
    states = TreasuryStatesFile.model_validate(document)
    validate_treasury_states(treasury_client, states.expected_states)


def test_matching_states(deployment, caplog):
    caplog.set_level(logging.INFO)
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    validate(treasury_client, document)
    assert "Verify Treasury States Done" in caplog.text


def test_blocklist_order_does_not_matter(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["blocklist"].reverse()
    validate(treasury_client, document)


def test_released_address_is_not_blocklisted(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["blocklist"].append(C.new_owner.address)
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path.startswith("blocklist")


def test_wrong_role(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["roles"]["pauser"] = C.outsider.address
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == "roles.pauser"
    assert e.value.actual == C.pauser.address
    assert '-    "pauser": "' + C.outsider.address in e.value.diff


def test_wrong_allowance(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["mintAllowances"][mint_cap_id]["allowance"] = "1"
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == f"mintAllowances.{mint_cap_id}.allowance"


def test_missing_controller(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["controllers"] = {}
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == f"controllers.{C.final_controller.address}"
    assert e.value.expected == "<missing>"


def test_pause_state_after_pause(deployment):
    client, treasury_client, mint_cap_id = deployment
    treasury_client.set_paused_state(C.pauser, True)
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["pauseState"] = {"current": "false", "next": "true"}
    validate(treasury_client, document)

    client.advance_epoch()
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == "pauseState.current"


@pytest.mark.parametrize(
    "mutate",
    [
        # unknown key
        lambda states: states.update(extra="x"),
        # missing key
        lambda states: states.pop("totalSupply"),
        # numbers must be given as strings
        lambda states: states.update(totalSupply=0),
        # booleans must be given as strings
        lambda states: states["pauseState"].update(next=False),
        lambda states: states["roles"].update(owner="0x1"),
        # addresses are lower-case hex as printed by the RPC
        lambda states: states["roles"].update(owner="0x" + "AB" * 32),
        lambda states: states["metadata"].update(iconUrl="not a url"),
    ],
)
def test_malformed_documents_are_rejected(deployment, mutate):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    mutate(document["expectedStates"])
    with pytest.raises(ValidationError):
        TreasuryStatesFile.model_validate(document)


def test_mint_cap_of_other_coin(deployment):
    client, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    client.state.objects[mint_cap_id].object_type = (
        f"{treasury_client.stablecoin_package_id}::treasury::MintCap<0x2::sui::SUI>"
    )
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == f"controllers.{C.final_controller.address}.mintCapId"


def test_removed_controller_mint_cap_is_checked(deployment):
    client, treasury_client, mint_cap_id = deployment
    client.treasury(treasury_client.treasury_object_id).controllers.clear()
    client.state.objects[mint_cap_id].object_type = "0x2::coin::TreasuryCap<0x2::sui::SUI>"
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["controllers"] = {}
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == f"mintAllowances.{mint_cap_id}"


def test_main_reads_yaml(deployment, tmp_path, monkeypatch):
    client, treasury_client, mint_cap_id = deployment
    path = tmp_path / "treasury-states.yaml"
    path.write_text(yaml.safe_dump(expected_document(treasury_client, mint_cap_id)))
    monkeypatch.setattr(treasury_states, "SuiRpcClient", lambda rpc_url: client)

    treasury_states.main(str(path))

    client.treasury(treasury_client.treasury_object_id).total_supply = 5
    with pytest.raises(StateMismatchError, match="totalSupply"):
        treasury_states.main(str(path))


def test_wrong_compatible_versions(deployment):
    _, treasury_client, mint_cap_id = deployment
    document = expected_document(treasury_client, mint_cap_id)
    document["expectedStates"]["compatibleVersions"] = ["1", "2"]
    with pytest.raises(StateMismatchError) as e:
        validate(treasury_client, document)
    assert e.value.path == "compatibleVersions"
    assert e.value.actual == ["1"]
