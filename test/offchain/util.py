from dataclasses import dataclass

from offchain.fake_sui import FakeSuiClient
from sui_stablecoin_scripts.ledger.treasury_client import SuiTreasuryClient
from sui_stablecoin_scripts.ledger.upgrade_service_client import UpgradeServiceClient
from sui_stablecoin_scripts.offchain.treasury.configure_minter import configure_minter
from sui_stablecoin_scripts.utils.confirm import always_confirm
from sui_stablecoin_scripts.utils.keys import Ed25519Keypair


def keypair(seed: int) -> Ed25519Keypair:
    return Ed25519Keypair.from_seed(bytes([seed]) * 32)


def never_confirm() -> bool:
    return False


def scripted_confirm(*answers):
    """A confirmation capability giving ``answers`` in order."""
    remaining = list(answers)

    def confirm() -> bool:
        return remaining.pop(0)

    return confirm


@dataclass
class TestConfig:
    deployer: Ed25519Keypair
    owner: Ed25519Keypair
    master_minter: Ed25519Keypair
    blocklister: Ed25519Keypair
    pauser: Ed25519Keypair
    metadata_updater: Ed25519Keypair
    temp_controller: Ed25519Keypair
    minter: Ed25519Keypair
    final_controller: Ed25519Keypair
    recipient: Ed25519Keypair
    new_owner: Ed25519Keypair
    outsider: Ed25519Keypair
    decimals: int = 6
    mint_allowance: str = "1000000"


DEFAULT_TEST_CONFIG = TestConfig(
    deployer=keypair(1),
    owner=keypair(2),
    master_minter=keypair(3),
    blocklister=keypair(4),
    pauser=keypair(5),
    metadata_updater=keypair(6),
    temp_controller=keypair(7),
    minter=keypair(8),
    final_controller=keypair(9),
    recipient=keypair(10),
    new_owner=keypair(11),
    outsider=keypair(12),
)


def setup_treasury(config: TestConfig = DEFAULT_TEST_CONFIG):
    """A fresh ledger holding one stablecoin whose roles are spread over the test keys."""
    client = FakeSuiClient()
    receipt = client.create_stablecoin(
        config.deployer.address,
        decimals=config.decimals,
        owner=config.owner.address,
        master_minter=config.master_minter.address,
        blocklister=config.blocklister.address,
        pauser=config.pauser.address,
        metadata_updater=config.metadata_updater.address,
    )
    return client, SuiTreasuryClient.build_from_deployment(client, receipt), receipt


def setup_minter(treasury_client: SuiTreasuryClient, config: TestConfig = DEFAULT_TEST_CONFIG) -> str:
    return configure_minter(
        treasury_client,
        config.master_minter,
        config.temp_controller,
        config.minter.address,
        config.mint_allowance,
        config.final_controller.address,
        confirm=always_confirm,
    )


def setup_upgrade_service(config: TestConfig = DEFAULT_TEST_CONFIG):
    """A stablecoin whose UpgradeCap sits in an UpgradeService administered by the owner."""
    client, treasury_client, receipt = setup_treasury(config)
    upgrade_cap = next(
        c["objectId"]
        for c in receipt["objectChanges"]
        if c.get("objectType", "").endswith("::package::UpgradeCap")
    )
    service_id = client.create_upgrade_service(config.owner.address, upgrade_cap)
    return client, treasury_client, UpgradeServiceClient.build_from_id(client, service_id)
