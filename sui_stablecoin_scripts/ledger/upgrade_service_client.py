from typing import Optional

from . import bcs, decoders
from .calls import MoveCall, Upgrade, obj, pure_address
from .errors import UnexpectedShapeError
from .type_tags import StructTag, normalize_sui_address, parse_struct_tag, single_type_param


class UpgradeServiceClient:
    """Client for an ``upgrade_service::UpgradeService<T>`` object guarding one UpgradeCap."""

    def __init__(
        self,
        client,
        upgrade_service_object_id: str,
        sui_extensions_package_id: str,
        upgrade_service_otw_type: str,
    ):
        self.client = client
        self.upgrade_service_object_id = upgrade_service_object_id
        self.sui_extensions_package_id = sui_extensions_package_id
        self.upgrade_service_otw_type = upgrade_service_otw_type

    @classmethod
    def build_from_id(cls, client, upgrade_service_object_id: str) -> "UpgradeServiceClient":
        service_type = decoders.object_type(client.get_object(upgrade_service_object_id))
        tag = parse_struct_tag(service_type)
        if (tag.module, tag.name) != ("upgrade_service", "UpgradeService"):
            raise UnexpectedShapeError(
                f"Object {upgrade_service_object_id} has type {service_type}, expected an upgrade_service::UpgradeService"
            )
        otw = single_type_param(tag)
        if not isinstance(otw, StructTag):
            raise UnexpectedShapeError(
                f"Failed to parse upgrade service OTW type from {service_type}"
            )
        return cls(
            client,
            normalize_sui_address(upgrade_service_object_id),
            tag.address,
            str(otw),
        )

    def _call(self, function: str, *args) -> MoveCall:
        return MoveCall(
            target=f"{self.sui_extensions_package_id}::upgrade_service::{function}",
            arguments=[obj(self.upgrade_service_object_id), *args],
            type_arguments=[self.upgrade_service_otw_type],
        )

    def _view(self, function: str, read):
        return decoders.decode_single_return_value(
            self.client.dev_inspect([self._call(function)]), read
        )

    def deposit_upgrade_cap(
        self, upgrade_cap_owner, upgrade_cap_object_id: str, gas_budget=None, dry_run=False
    ) -> dict:
        return self.client.execute(
            [self._call("deposit", obj(upgrade_cap_object_id))],
            upgrade_cap_owner,
            gas_budget=gas_budget,
            dry_run=dry_run,
        )

    def change_admin(self, admin, new_admin: str, gas_budget=None, dry_run=False) -> dict:
        return self.client.execute(
            [self._call("change_admin", pure_address(new_admin))],
            admin,
            gas_budget=gas_budget,
            dry_run=dry_run,
        )

    def accept_pending_admin(self, pending_admin, gas_budget=None, dry_run=False) -> dict:
        return self.client.execute(
            [self._call("accept_admin")],
            pending_admin,
            gas_budget=gas_budget,
            dry_run=dry_run,
        )

    def upgrade(
        self,
        admin,
        project_path: str,
        latest_package_id: str,
        with_unpublished_dependencies: bool = False,
        gas_budget=None,
        dry_run=False,
    ) -> dict:
        command = Upgrade(
            project_path=project_path,
            package_id=latest_package_id,
            upgrade_service_id=self.upgrade_service_object_id,
            authorize_target=f"{self.sui_extensions_package_id}::upgrade_service::authorize_upgrade",
            commit_target=f"{self.sui_extensions_package_id}::upgrade_service::commit_upgrade",
            type_arguments=[self.upgrade_service_otw_type],
            policy=self.get_upgrade_cap_policy(),
            with_unpublished_dependencies=with_unpublished_dependencies,
        )
        return self.client.execute(
            [command], admin, gas_budget=gas_budget, dry_run=dry_run
        )

    def get_admin(self) -> str:
        return self._view("admin", bcs.read_address)

    def get_pending_admin(self) -> Optional[str]:
        return self._view("pending_admin", bcs.read_option_address)

    def get_upgrade_cap_package_id(self) -> str:
        return self._view("upgrade_cap_package", bcs.read_address)

    def get_upgrade_cap_version(self) -> int:
        return self._view("upgrade_cap_version", bcs.read_u64)

    def get_upgrade_cap_policy(self) -> int:
        return self._view("upgrade_cap_policy", bcs.read_u8)
