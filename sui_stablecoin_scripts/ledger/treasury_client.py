"""
Client for a single stablecoin Treasury<T> object.

Mutating methods build the Move calls of the stablecoin package and hand them to
the ledger client for signing and submission; every one of them accepts
``gas_budget`` and ``dry_run``. Read methods go through dev-inspected view
functions or the decoders in ``ledger.decoders``.
"""
from typing import List, Optional

from . import bcs, decoders
from .calls import (
    DENY_LIST_OBJECT_ID,
    MoveCall,
    obj,
    pure_address,
    pure_id,
    pure_string,
    pure_u64,
)
from .errors import PreconditionError, UnexpectedShapeError
from .tx_output import single_created_object
from .type_tags import StructTag, normalize_sui_address, parse_struct_tag, single_type_param

EPOCHS = ("current", "next")
MIGRATION_ACTIONS = ("start", "abort", "complete")


def _check_epoch(epoch: str):
    if epoch not in EPOCHS:
        raise ValueError(f"Epoch must be one of {EPOCHS}, got '{epoch}'")


class SuiTreasuryClient:
    def __init__(
        self,
        client,
        treasury_object_id: str,
        stablecoin_package_id: str,
        coin_type: str,
        metadata_object_id: Optional[str] = None,
    ):
        self.client = client
        self.treasury_object_id = treasury_object_id
        self.stablecoin_package_id = stablecoin_package_id
        self.coin_type = coin_type
        self.metadata_object_id = metadata_object_id

    @classmethod
    def _from_type(
        cls, client, treasury_object_id: str, treasury_type: str, metadata_object_id=None
    ) -> "SuiTreasuryClient":
        tag = parse_struct_tag(treasury_type)
        if (tag.module, tag.name) != ("treasury", "Treasury"):
            raise UnexpectedShapeError(
                f"Object {treasury_object_id} has type {treasury_type}, expected a treasury::Treasury"
            )
        coin_tag = single_type_param(tag)
        if not isinstance(coin_tag, StructTag):
            raise UnexpectedShapeError(f"Failed to parse coin type from {treasury_type}")
        return cls(
            client,
            normalize_sui_address(treasury_object_id),
            tag.address,
            str(coin_tag),
            metadata_object_id,
        )

    @classmethod
    def build_from_id(
        cls, client, treasury_object_id: str, metadata_object_id: Optional[str] = None
    ) -> "SuiTreasuryClient":
        response = client.get_object(treasury_object_id)
        return cls._from_type(
            client,
            treasury_object_id,
            decoders.object_type(response),
            metadata_object_id,
        )

    @classmethod
    def build_from_deployment(cls, client, deploy_receipt: dict) -> "SuiTreasuryClient":
        treasury = single_created_object(deploy_receipt, "treasury", "Treasury")
        metadata = single_created_object(deploy_receipt, "coin", "CoinMetadata", "0x2")
        return cls._from_type(
            client, treasury["objectId"], treasury["objectType"], metadata["objectId"]
        )

    # Helpers

    def _target(self, module: str, function: str) -> str:
        return f"{self.stablecoin_package_id}::{module}::{function}"

    def _call(self, module: str, function: str, *args) -> MoveCall:
        return MoveCall(
            target=self._target(module, function),
            arguments=[obj(self.treasury_object_id), *args],
            type_arguments=[self.coin_type],
        )

    def _view(self, call: MoveCall, read):
        return decoders.decode_single_return_value(self.client.dev_inspect([call]), read)

    def _execute(self, calls: List[MoveCall], signer, gas_budget=None, dry_run=False):
        return self.client.execute(calls, signer, gas_budget=gas_budget, dry_run=dry_run)

    # Mutations

    def configure_new_controller(
        self, master_minter, controller: str, minter: str, gas_budget=None, dry_run=False
    ) -> dict:
        return self._execute(
            [
                self._call(
                    "treasury",
                    "configure_new_controller",
                    pure_address(controller),
                    pure_address(minter),
                )
            ],
            master_minter,
            gas_budget,
            dry_run,
        )

    def set_mint_allowance(
        self, controller, allowance: int, gas_budget=None, dry_run=False
    ) -> dict:
        return self._execute(
            [
                self._call(
                    "treasury",
                    "configure_minter",
                    obj(DENY_LIST_OBJECT_ID),
                    pure_u64(allowance),
                )
            ],
            controller,
            gas_budget,
            dry_run,
        )

    def mint(
        self,
        minter,
        mint_cap_id: str,
        recipient: str,
        amount: int,
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        return self._execute(
            [
                self._call(
                    "treasury",
                    "mint",
                    obj(mint_cap_id),
                    obj(DENY_LIST_OBJECT_ID),
                    pure_u64(amount),
                    pure_address(recipient),
                )
            ],
            minter,
            gas_budget,
            dry_run,
        )

    def set_blocklist_state(
        self, blocklister, address: str, blocked: bool, gas_budget=None, dry_run=False
    ) -> dict:
        function = "blocklist" if blocked else "unblocklist"
        return self._execute(
            [
                self._call(
                    "treasury",
                    function,
                    obj(DENY_LIST_OBJECT_ID),
                    pure_address(address),
                )
            ],
            blocklister,
            gas_budget,
            dry_run,
        )

    def set_paused_state(
        self, pauser, paused: bool, gas_budget=None, dry_run=False
    ) -> dict:
        function = "pause" if paused else "unpause"
        return self._execute(
            [self._call("treasury", function, obj(DENY_LIST_OBJECT_ID))],
            pauser,
            gas_budget,
            dry_run,
        )

    def rotate_controller(
        self,
        master_minter,
        new_controller: str,
        old_controller: str,
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        """
        Move the MintCap of ``old_controller`` to ``new_controller``.
        Both calls go into one transaction so the swap is atomic.
        """
        mint_cap_id = self.get_mint_cap_id(old_controller)
        if mint_cap_id is None:
            raise PreconditionError(
                f"Could not find Mint Cap for controller address {old_controller}"
            )
        return self._execute(
            [
                self._call(
                    "treasury",
                    "configure_controller",
                    pure_address(new_controller),
                    pure_id(mint_cap_id),
                ),
                self._call(
                    "treasury", "remove_controller", pure_address(old_controller)
                ),
            ],
            master_minter,
            gas_budget,
            dry_run,
        )

    def update_metadata(
        self,
        metadata_updater,
        name: str,
        symbol: str,
        description: str,
        icon_url: str,
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        metadata_object_id = self.get_metadata_object_id()
        return self._execute(
            [
                self._call(
                    "treasury",
                    "update_metadata",
                    obj(metadata_object_id),
                    pure_string(name),
                    pure_string(symbol),
                    pure_string(description),
                    pure_string(icon_url),
                )
            ],
            metadata_updater,
            gas_budget,
            dry_run,
        )

    def rotate_privileged_roles(
        self,
        owner,
        new_master_minter: str,
        new_blocklister: str,
        new_pauser: str,
        new_metadata_updater: str,
        new_owner: Optional[str],
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        """
        Replace every single-step role and propose a new owner in one transaction.
        ``new_owner=None`` leaves ownership untouched.
        """
        calls = [
            self._call("entry", "update_master_minter", pure_address(new_master_minter)),
            self._call("entry", "update_blocklister", pure_address(new_blocklister)),
            self._call("entry", "update_pauser", pure_address(new_pauser)),
            self._call(
                "entry", "update_metadata_updater", pure_address(new_metadata_updater)
            ),
        ]
        if new_owner is not None:
            calls.append(
                self._call("entry", "transfer_ownership", pure_address(new_owner))
            )
        return self._execute(calls, owner, gas_budget, dry_run)

    def accept_treasury_owner(self, pending_owner, gas_budget=None, dry_run=False) -> dict:
        return self._execute(
            [self._call("entry", "accept_ownership")], pending_owner, gas_budget, dry_run
        )

    def upgrade_migration(
        self,
        owner,
        action: str,
        new_package_id: Optional[str] = None,
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        if action not in MIGRATION_ACTIONS:
            raise PreconditionError(
                f"Migration action must be one of {MIGRATION_ACTIONS}, got '{action}'"
            )
        package_id = new_package_id or self.stablecoin_package_id
        call = MoveCall(
            target=f"{package_id}::treasury::{action}_migration",
            arguments=[obj(self.treasury_object_id)],
            type_arguments=[self.coin_type],
        )
        return self._execute([call], owner, gas_budget, dry_run)

    # Reads

    def get_treasury_object_fields(self) -> decoders.TreasuryFields:
        return decoders.decode_treasury_fields(
            self.client.get_object(self.treasury_object_id)
        )

    def get_roles(self) -> decoders.Roles:
        bag_id = self.get_treasury_object_fields().roles_bag_id

        def role(key: str) -> dict:
            return self.client.get_dynamic_field_object(
                bag_id,
                f"{self.stablecoin_package_id}::roles::{key}",
                {"dummy_field": False},
            )

        owner, pending_owner = decoders.decode_two_step_role(role("OwnerKey"))
        return decoders.Roles(
            owner=owner,
            pending_owner=pending_owner,
            master_minter=decoders.decode_role_address(role("MasterMinterKey")),
            blocklister=decoders.decode_role_address(role("BlocklisterKey")),
            pauser=decoders.decode_role_address(role("PauserKey")),
            metadata_updater=decoders.decode_role_address(role("MetadataUpdaterKey")),
        )

    def get_mint_allowance(self, mint_cap_id: str) -> int:
        return self._view(
            self._call("treasury", "mint_allowance", pure_id(mint_cap_id)),
            bcs.read_u64,
        )

    def get_mint_cap_id(self, controller: str) -> Optional[str]:
        """The MintCap id controlled by ``controller``, or None if it controls none."""
        return self._view(
            self._call("treasury", "get_mint_cap_id", pure_address(controller)),
            bcs.read_option_address,
        )

    def get_object_owner(self, object_id: str) -> decoders.ObjectOwner:
        return decoders.decode_owner(self.client.get_object(object_id))

    def get_mint_cap_owner(self, controller: str) -> Optional[decoders.ObjectOwner]:
        mint_cap_id = self.get_mint_cap_id(controller)
        if mint_cap_id is None:
            return None
        return self.get_object_owner(mint_cap_id)

    def get_metadata(self) -> decoders.CoinMetadata:
        return decoders.decode_coin_metadata(
            self.client.get_coin_metadata(self.coin_type), self.coin_type
        )

    def get_metadata_object_id(self) -> str:
        if self.metadata_object_id is None:
            self.metadata_object_id = self.get_metadata().object_id
        return self.metadata_object_id

    def get_total_supply(self) -> int:
        return self._view(self._call("treasury", "total_supply"), bcs.read_u64)

    def get_compatible_versions(self) -> List[int]:
        return self.get_treasury_object_fields().compatible_versions

    def is_paused(self, epoch: str) -> bool:
        _check_epoch(epoch)
        call = MoveCall(
            target=f"0x2::coin::deny_list_v2_is_global_pause_enabled_{epoch}_epoch",
            arguments=[obj(DENY_LIST_OBJECT_ID)],
            type_arguments=[self.coin_type],
        )
        return self._view(call, bcs.read_bool)

    def is_blocklisted(self, address: str, epoch: str) -> bool:
        _check_epoch(epoch)
        call = MoveCall(
            target=f"0x2::coin::deny_list_v2_contains_{epoch}_epoch",
            arguments=[obj(DENY_LIST_OBJECT_ID), pure_address(address)],
            type_arguments=[self.coin_type],
        )
        return self._view(call, bcs.read_bool)

    def get_blocklisted_event_addresses(self) -> List[str]:
        events = self.client.query_events(
            f"{self.stablecoin_package_id}::treasury::Blocklisted<{self.coin_type}>"
        )
        return [decoders.decode_blocklisted_event(e) for e in events]
