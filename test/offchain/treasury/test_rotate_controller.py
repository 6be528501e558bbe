import logging

import pytest

from offchain.util import DEFAULT_TEST_CONFIG, never_confirm, setup_minter, setup_treasury
from sui_stablecoin_scripts.ledger.errors import (
    OperationAborted,
    PreconditionError,
    TransactionFailedError,
)
from sui_stablecoin_scripts.offchain.treasury.rotate_controller import rotate_controller
from sui_stablecoin_scripts.utils.confirm import always_confirm

C = DEFAULT_TEST_CONFIG


def test_rotate_controller():
    client, treasury_client, _ = setup_treasury()
    mint_cap_id = setup_minter(treasury_client)

    rotate_controller(
        treasury_client,
        C.master_minter,
        C.final_controller.address,
        C.outsider.address,
        confirm=always_confirm,
    )
    assert treasury_client.get_mint_cap_id(C.outsider.address) == mint_cap_id
    assert treasury_client.get_mint_cap_id(C.final_controller.address) is None
    # both changes land in one transaction
    assert [c.function for c in client.executed[-1].commands] == [
        "configure_controller",
        "remove_controller",
    ]


def test_rotate_controller_is_atomic():
    client, treasury_client, _ = setup_treasury()
    mint_cap_id = setup_minter(treasury_client)
    executed = len(client.executed)

    # the new controller already holds a MintCap, so configure_controller aborts
    with pytest.raises(TransactionFailedError):
        rotate_controller(
            treasury_client,
            C.master_minter,
            C.final_controller.address,
            C.final_controller.address,
            confirm=always_confirm,
        )
    assert len(client.executed) == executed
    assert treasury_client.get_mint_cap_id(C.final_controller.address) == mint_cap_id


def test_rotate_controller_unknown_old_controller():
    client, treasury_client, _ = setup_treasury()
    with pytest.raises(PreconditionError, match="Could not find Mint Cap"):
        rotate_controller(
            treasury_client,
            C.master_minter,
            C.outsider.address,
            C.final_controller.address,
            confirm=always_confirm,
        )


def test_rotate_controller_wrong_key():
    client, treasury_client, _ = setup_treasury()
    setup_minter(treasury_client)
    executed = len(client.executed)
    with pytest.raises(PreconditionError, match="Incorrect master minter key"):
        rotate_controller(
            treasury_client,
            C.minter,
            C.final_controller.address,
            C.outsider.address,
            confirm=always_confirm,
        )
    assert len(client.executed) == executed


def test_rotate_controller_declined(caplog):
    caplog.set_level(logging.INFO)
    client, treasury_client, _ = setup_treasury()
    setup_minter(treasury_client)
    executed = len(client.executed)
    with pytest.raises(OperationAborted):
        rotate_controller(
            treasury_client,
            C.master_minter,
            C.final_controller.address,
            C.outsider.address,
            confirm=never_confirm,
        )
    assert len(client.executed) == executed
    assert f"MintCap held by {C.minter.address}" in caplog.text


def test_rotate_controller_dry_run(logs_dir):
    client, treasury_client, _ = setup_treasury()
    mint_cap_id = setup_minter(treasury_client)
    executed = len(client.executed)

    rotate_controller(
        treasury_client,
        C.master_minter,
        C.final_controller.address,
        C.outsider.address,
        dry_run=True,
        confirm=always_confirm,
    )
    assert len(client.executed) == executed
    assert len(client.dry_runs) == 1
    assert treasury_client.get_mint_cap_id(C.final_controller.address) == mint_cap_id
    assert list(logs_dir.glob("rotate-controller-dry-run-*.json"))


def test_mint_cap_stays_with_minter():
    _, treasury_client, _ = setup_treasury()
    setup_minter(treasury_client)
    owner = treasury_client.get_mint_cap_owner(C.final_controller.address)
    assert (owner.kind, owner.address) == ("address", C.minter.address)
    assert treasury_client.get_mint_cap_owner(C.temp_controller.address) is None
