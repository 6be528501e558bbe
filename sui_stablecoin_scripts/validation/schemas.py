"""
Strict schemas of the expected-state documents. Unknown keys, missing keys and
values of the wrong JSON type are all rejected before any comparison happens.
"""
import json
from pathlib import Path
from typing import Annotated, Dict, List, Literal

import yaml
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

SuiAddress = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-f]{64}$")]
SuiAddressOrEmpty = Annotated[str, StringConstraints(pattern=r"^(0x[0-9a-f]{64})?$")]
Url = Annotated[str, StringConstraints(pattern=r"^https?://\S+$")]
BooleanString = Literal["true", "false"]


class StrictModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid", strict=True, alias_generator=to_camel, populate_by_name=True
    )


class ControllerState(StrictModel):
    mint_cap_id: SuiAddress


class MintAllowanceState(StrictModel):
    minter: SuiAddress
    allowance: str


class RolesState(StrictModel):
    owner: SuiAddress
    pending_owner: SuiAddressOrEmpty
    master_minter: SuiAddress
    blocklister: SuiAddress
    pauser: SuiAddress
    metadata_updater: SuiAddress


class PauseState(StrictModel):
    current: BooleanString
    next: BooleanString


class MetadataState(StrictModel):
    id: SuiAddress
    decimals: str
    name: str
    symbol: str
    description: str
    icon_url: Url


class TreasuryStates(StrictModel):
    stablecoin_package_id: SuiAddress
    coin_type: str
    controllers: Dict[SuiAddress, ControllerState]
    mint_allowances: Dict[SuiAddress, MintAllowanceState]
    roles: RolesState
    total_supply: str
    pause_state: PauseState
    metadata: MetadataState
    compatible_versions: List[str]
    blocklist: List[SuiAddress]


class TreasuryStatesFile(StrictModel):
    treasury_object_id: SuiAddress
    expected_states: TreasuryStates


class UpgradeServiceStates(StrictModel):
    sui_extensions_package_id: SuiAddress
    upgrade_service_otw_type: str
    admin: SuiAddress
    pending_admin: SuiAddressOrEmpty
    upgrade_cap_package_id: SuiAddress
    upgrade_cap_version: str
    upgrade_cap_policy: int


def load_document(path) -> dict:
    """Read a JSON or YAML document, chosen by file extension."""
    path = Path(path)
    with path.open() as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)
