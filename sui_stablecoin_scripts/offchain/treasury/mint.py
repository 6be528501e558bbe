import logging

import fire

from ..util import (
    address_arg,
    build_treasury_client,
    confirm_or_abort,
    log_receipt,
    to_subunits,
)
from ...ledger.errors import PreconditionError
from ...ledger.reconcile import same_address
from ...ledger.treasury_client import SuiTreasuryClient
from ...utils import config
from ...utils.confirm import Confirm, confirmation, prompt_confirmation
from ...utils.keys import Ed25519Keypair
from ...utils.network import SuiRpcClient, show_tx

_LOGGER = logging.getLogger(__name__)


def mint(
    treasury_client: SuiTreasuryClient,
    minter: Ed25519Keypair,
    mint_cap_id: str,
    recipient: str,
    amount,
    gas_budget: int = None,
    dry_run: bool = False,
    confirm: Confirm = prompt_confirmation,
) -> dict:
    owner = treasury_client.get_object_owner(mint_cap_id)
    if owner.kind != "address" or not same_address(owner.address, minter.address):
        raise PreconditionError(
            f"MintCap {mint_cap_id} is not held by {minter.address}"
        )

    decimals = treasury_client.get_metadata().decimals
    subunits = to_subunits(amount, decimals)
    allowance = treasury_client.get_mint_allowance(mint_cap_id)
    if subunits > allowance:
        raise PreconditionError(
            f"Mint amount {subunits} exceeds the remaining allowance {allowance} of MintCap {mint_cap_id}"
        )

    confirm_or_abort(confirm, f"Going to mint {amount} ({subunits} units) to {recipient}")
    receipt = treasury_client.mint(
        minter, mint_cap_id, recipient, subunits, gas_budget=gas_budget, dry_run=dry_run
    )
    log_receipt("mint", receipt, dry_run)
    return receipt


def main(
    minter_key: str,
    mint_cap_id: str,
    recipient: str,
    amount: str,
    treasury_object_id: str = None,
    treasury_deploy_file: str = None,
    rpc_url: str = None,
    gas_budget: int = None,
    dry_run: bool = False,
    yes: bool = False,
):
    client = SuiRpcClient(rpc_url or config.RPC_URL)
    treasury_client = build_treasury_client(
        client, address_arg(treasury_object_id), treasury_deploy_file
    )
    receipt = mint(
        treasury_client,
        Ed25519Keypair.from_secret_key(minter_key),
        address_arg(mint_cap_id),
        address_arg(recipient),
        amount,
        gas_budget=gas_budget or config.GAS_BUDGET,
        dry_run=dry_run,
        confirm=confirmation(yes),
    )
    show_tx(receipt)
    return receipt


if __name__ == "__main__":
    fire.Fire(main)
