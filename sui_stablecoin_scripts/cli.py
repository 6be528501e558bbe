"""
Entry point bundling every operator script as a subcommand:

    stablecoin-scripts configure-minter --hot-master-minter-key ... --yes
"""
import logging

import fire

from .offchain import deploy, deploy_summary, execute_transaction, generate_keypair
from .offchain.treasury import (
    accept_treasury_owner,
    configure_minter,
    mint,
    rotate_controller,
    rotate_privileged_roles,
    set_blocklist_state,
    set_pause_state,
    update_metadata,
    upgrade_migration,
)
from .offchain.upgrade_service import (
    accept_upgrade_service_admin,
    change_upgrade_service_admin,
    deposit_upgrade_cap,
    upgrade,
)
from .utils import config
from .validation import treasury_states, upgrade_service_states

COMMANDS = {
    "deploy": deploy.main,
    "deploy_summary": deploy_summary.main,
    "generate_keypair": generate_keypair.main,
    "execute_transaction": execute_transaction.main,
    "configure_minter": configure_minter.main,
    "rotate_controller": rotate_controller.main,
    "set_blocklist": set_blocklist_state.main,
    "set_pause": set_pause_state.main,
    "mint": mint.main,
    "update_metadata": update_metadata.main,
    "rotate_privileged_roles": rotate_privileged_roles.main,
    "accept_treasury_owner": accept_treasury_owner.main,
    "upgrade_migration": upgrade_migration.main,
    "change_upgrade_service_admin": change_upgrade_service_admin.main,
    "accept_upgrade_service_admin": accept_upgrade_service_admin.main,
    "deposit_upgrade_cap": deposit_upgrade_cap.main,
    "upgrade": upgrade.main,
    "validate_treasury_states": treasury_states.main,
    "validate_upgrade_service_states": upgrade_service_states.main,
}


def main():
    logging.basicConfig(format=">>> %(message)s", level=config.LOG_LEVEL)
    fire.Fire(COMMANDS)


if __name__ == "__main__":
    main()
