import logging

import fire

from .util import address_arg, confirm_or_abort, log_receipt
from ..ledger.calls import MoveCall, Publish, ResultArg, TransferObjects
from ..ledger.errors import PreconditionError
from ..ledger.tx_output import single_published_package
from ..utils import config
from ..utils.confirm import Confirm, confirmation, prompt_confirmation
from ..utils.keys import Ed25519Keypair
from ..utils.move_package import SuiCli
from ..utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def deploy(
    client,
    sui_cli: SuiCli,
    package_name: str,
    deployer: Ed25519Keypair,
    upgrade_cap_recipient: str = None,
    make_immutable: bool = False,
    with_unpublished_dependencies: bool = False,
    write_package_id: bool = False,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    """
    Publish a Move package. The UpgradeCap is either sent to ``upgrade_cap_recipient``
    or destroyed, making the package immutable.
    """
    if make_immutable and upgrade_cap_recipient:
        raise PreconditionError(
            "--upgrade-cap-recipient and --make-immutable are mutually exclusive"
        )
    if not make_immutable and not upgrade_cap_recipient:
        raise PreconditionError("Missing required field 'upgrade_cap_recipient'!")

    _LOGGER.info(f"Deployer: {deployer.address}")
    _LOGGER.info(f"Building package '{package_name}'...")
    built = sui_cli.build_package(package_name, with_unpublished_dependencies)

    commands = [
        Publish(
            str(sui_cli.package_path(package_name)),
            with_unpublished_dependencies,
        )
    ]
    if make_immutable:
        commands.append(
            MoveCall("0x2::package::make_immutable", arguments=[ResultArg(0)])
        )
        fate = "destroyed"
    else:
        commands.append(TransferObjects([ResultArg(0)], upgrade_cap_recipient))
        fate = f"sent to {upgrade_cap_recipient}"

    confirm_or_abort(
        confirm,
        f"Going to deploy package '{package_name}' with digest {built['digest']}, UpgradeCap will be {fate}",
    )
    receipt = client.execute(
        commands, deployer, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt(f"deploy-{package_name}", receipt, dry_run)

    if write_package_id and not dry_run:
        package_id = single_published_package(receipt)["packageId"]
        sui_cli.write_published_address(package_name, package_id)

    _LOGGER.info("Deploy process complete!")
    return receipt


def main(
    package_name: str,
    deployer_key: str = None,
    upgrade_cap_recipient: str = None,
    make_immutable: bool = False,
    with_unpublished_dependencies: bool = False,
    write_package_id: bool = False,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    rpc_url = rpc_url or config.RPC_URL
    _LOGGER.info(f"RPC URL: {rpc_url}")
    receipt = deploy(
        SuiRpcClient(rpc_url),
        SuiCli(rpc_url=rpc_url),
        package_name,
        Ed25519Keypair.from_secret_key(deployer_key or config.DEPLOYER_PRIVATE_KEY),
        upgrade_cap_recipient=address_arg(upgrade_cap_recipient),
        make_immutable=make_immutable,
        with_unpublished_dependencies=with_unpublished_dependencies,
        write_package_id=write_package_id,
        gas_budget=gas_budget,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
