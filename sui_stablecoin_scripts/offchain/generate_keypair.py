import logging

import fire

from ..utils.keys import Ed25519Keypair
from ..utils.network import SuiRpcClient
from ..utils.output import write_json_output

_LOGGER = logging.getLogger(__name__)


def generate_keypair(client=None, prefund: bool = False, faucet_url: str = None) -> Ed25519Keypair:
    keypair = Ed25519Keypair.generate()

    if prefund:
        _LOGGER.info("Requesting test tokens...")
        client.request_faucet(keypair.address, faucet_url)
        _LOGGER.info(f"Funded address {keypair.address}")

    write_json_output(
        "generate-keypair",
        {
            "publicKey": keypair.address,
            "secretKey": keypair.secret_key,
            "funded": bool(prefund),
        },
    )
    return keypair


def main(prefund: bool = False, faucet_url: str = None, rpc_url: str = None):
    keypair = generate_keypair(
        SuiRpcClient(rpc_url) if prefund else None, prefund, faucet_url
    )
    _LOGGER.info(f"Public key: {keypair.address}")
    _LOGGER.info(f"Secret key: {keypair.secret_key}")
    return keypair.address


if __name__ == "__main__":
    fire.Fire(main)
