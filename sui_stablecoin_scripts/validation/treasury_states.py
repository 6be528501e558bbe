"""
Check a deployed Treasury against a document of expected states.

The actual state is rebuilt from the chain in the same shape as the expected
document: controllers from the controllers table, mint allowances from the
allowances table, and the blocklist from Blocklisted events that are still in
effect for the next epoch.
"""
import logging
from typing import Dict, List

import fire

from .compare import assert_states_equal
from .schemas import TreasuryStates, TreasuryStatesFile, load_document
from ..ledger.errors import StateMismatchError
from ..ledger.decoders import decode_dynamic_field_key, object_type
from ..ledger.treasury_client import SuiTreasuryClient
from ..ledger.type_tags import same_type
from ..utils import config
from ..utils.network import SuiRpcClient

_LOGGER = logging.getLogger(__name__)


def _bool_string(value: bool) -> str:
    return "true" if value else "false"


def construct_controllers(treasury_client: SuiTreasuryClient, table_id: str) -> Dict[str, dict]:
    controllers = {}
    for entry in treasury_client.client.get_dynamic_fields(table_id):
        controller = decode_dynamic_field_key(entry)
        controllers[controller] = {
            "mintCapId": treasury_client.get_mint_cap_id(controller) or ""
        }
    return controllers


def construct_mint_allowances(
    treasury_client: SuiTreasuryClient, table_id: str
) -> Dict[str, dict]:
    allowances = {}
    for entry in treasury_client.client.get_dynamic_fields(table_id):
        mint_cap_id = decode_dynamic_field_key(entry)
        owner = treasury_client.get_object_owner(mint_cap_id)
        allowances[mint_cap_id] = {
            "minter": owner.address or "",
            "allowance": str(treasury_client.get_mint_allowance(mint_cap_id)),
        }
    return allowances


def construct_blocklist(treasury_client: SuiTreasuryClient) -> List[str]:
    blocklist = []
    for address in treasury_client.get_blocklisted_event_addresses():
        if address in blocklist:
            continue
        if treasury_client.is_blocklisted(address, "next"):
            blocklist.append(address)
    return blocklist


def get_actual_states(treasury_client: SuiTreasuryClient) -> dict:
    fields = treasury_client.get_treasury_object_fields()
    roles = treasury_client.get_roles()
    metadata = treasury_client.get_metadata()
    return {
        "stablecoinPackageId": treasury_client.stablecoin_package_id,
        "coinType": treasury_client.coin_type,
        "controllers": construct_controllers(treasury_client, fields.controllers_table_id),
        "mintAllowances": construct_mint_allowances(
            treasury_client, fields.mint_allowances_table_id
        ),
        "roles": {
            "owner": roles.owner,
            "pendingOwner": roles.pending_owner or "",
            "masterMinter": roles.master_minter,
            "blocklister": roles.blocklister,
            "pauser": roles.pauser,
            "metadataUpdater": roles.metadata_updater,
        },
        "totalSupply": str(treasury_client.get_total_supply()),
        "pauseState": {
            "current": _bool_string(treasury_client.is_paused("current")),
            "next": _bool_string(treasury_client.is_paused("next")),
        },
        "metadata": {
            "id": metadata.object_id,
            "decimals": str(metadata.decimals),
            "name": metadata.name,
            "symbol": metadata.symbol,
            "description": metadata.description,
            "iconUrl": metadata.icon_url,
        },
        "compatibleVersions": [str(v) for v in fields.compatible_versions],
        "blocklist": construct_blocklist(treasury_client),
    }


def _check_object_type(
    treasury_client: SuiTreasuryClient, object_id: str, expected: str, path: str
):
    actual = object_type(treasury_client.client.get_object(object_id))
    if not same_type(actual, expected):
        raise StateMismatchError(path, expected, actual)


def check_object_types(treasury_client: SuiTreasuryClient, expected: TreasuryStates):
    """MintCaps and the metadata object must be typed over this treasury's coin."""
    coin_type = treasury_client.coin_type
    mint_cap_type = f"{treasury_client.stablecoin_package_id}::treasury::MintCap<{coin_type}>"
    for controller, state in expected.controllers.items():
        _check_object_type(
            treasury_client,
            state.mint_cap_id,
            mint_cap_type,
            f"controllers.{controller}.mintCapId",
        )
    checked = {state.mint_cap_id for state in expected.controllers.values()}
    # Caps left behind by remove_controller still hold an allowance
    for mint_cap_id in expected.mint_allowances:
        if mint_cap_id not in checked:
            _check_object_type(
                treasury_client,
                mint_cap_id,
                mint_cap_type,
                f"mintAllowances.{mint_cap_id}",
            )
    _check_object_type(
        treasury_client,
        expected.metadata.id,
        f"0x2::coin::CoinMetadata<{coin_type}>",
        "metadata.id",
    )


def _canonical(states: dict) -> dict:
    # Blocklist membership is order-insensitive
    return {**states, "blocklist": sorted(set(states["blocklist"]))}


def validate_treasury_states(treasury_client: SuiTreasuryClient, expected: TreasuryStates):
    actual = get_actual_states(treasury_client)
    assert_states_equal(
        _canonical(expected.model_dump(by_alias=True)), _canonical(actual)
    )
    check_object_types(treasury_client, expected)
    _LOGGER.info("Verify Treasury States Done")


def main(config_file: str, rpc_url: str = None):
    document = TreasuryStatesFile.model_validate(load_document(config_file))
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = SuiTreasuryClient.build_from_id(client, document.treasury_object_id)
    validate_treasury_states(treasury_client, document.expected_states)


if __name__ == "__main__":
    fire.Fire(main)
