"""
Summarize the package and object ids of a full stablecoin deployment from the
receipts of its three publish transactions.
"""
import logging

import fire

from ..ledger.tx_output import single_created_object, single_published_package
from ..utils.output import read_transaction_output

_LOGGER = logging.getLogger(__name__)


def parse_deploy_summary(
    sui_extensions_receipt: dict, stablecoin_receipt: dict, token_receipt: dict
) -> dict:
    def created(receipt, module, name, address=None):
        return single_created_object(receipt, module, name, address)["objectId"]

    return {
        "packageIds": {
            "suiExtensions": single_published_package(sui_extensions_receipt)["packageId"],
            "stablecoin": single_published_package(stablecoin_receipt)["packageId"],
            "token": single_published_package(token_receipt)["packageId"],
        },
        "objectIds": {
            "stablecoinUpgradeCap": created(stablecoin_receipt, "package", "UpgradeCap", "0x2"),
            "stablecoinUpgradeService": created(
                stablecoin_receipt, "upgrade_service", "UpgradeService"
            ),
            "tokenUpgradeCap": created(token_receipt, "package", "UpgradeCap", "0x2"),
            "tokenUpgradeService": created(token_receipt, "upgrade_service", "UpgradeService"),
            "tokenTreasury": created(token_receipt, "treasury", "Treasury"),
            "tokenTreasuryCap": created(token_receipt, "coin", "TreasuryCap", "0x2"),
            "tokenDenyCapV2": created(token_receipt, "coin", "DenyCapV2", "0x2"),
            "tokenCoinMetadata": created(token_receipt, "coin", "CoinMetadata", "0x2"),
            "tokenRegulatedCoinMetadata": created(
                token_receipt, "coin", "RegulatedCoinMetadata", "0x2"
            ),
        },
    }


def main(sui_extensions_deploy_file: str, stablecoin_deploy_file: str, token_deploy_file: str):
    summary = parse_deploy_summary(
        read_transaction_output(sui_extensions_deploy_file),
        read_transaction_output(stablecoin_deploy_file),
        read_transaction_output(token_deploy_file),
    )
    _LOGGER.info("===== Published Packages =====")
    for name, package_id in summary["packageIds"].items():
        _LOGGER.info(f"{name}: {package_id}")
    _LOGGER.info("===== Objects =====")
    for name, object_id in summary["objectIds"].items():
        _LOGGER.info(f"{name}: {object_id}")
    return summary


if __name__ == "__main__":
    fire.Fire(main)
