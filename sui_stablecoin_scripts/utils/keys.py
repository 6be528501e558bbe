"""
Ed25519 key material for the operator scripts, backed by pysui's keypairs.
"""
from dataclasses import dataclass

from pysui.abstracts import SignatureScheme
from pysui.sui.sui_crypto import SuiKeyPair, SuiKeyPairED25519, create_new_keypair
from pysui.sui.sui_types.address import SuiAddress

from ..ledger.errors import PreconditionError

SUI_PRIVATE_KEY_PREFIX = "suiprivkey"


@dataclass
class Ed25519Keypair:
    keypair: SuiKeyPair

    @classmethod
    def generate(cls) -> "Ed25519Keypair":
        _, keypair = create_new_keypair(SignatureScheme.ED25519)
        return cls(keypair)

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Keypair":
        return cls(SuiKeyPairED25519.from_bytes(seed))

    @classmethod
    def from_secret_key(cls, secret_key: str) -> "Ed25519Keypair":
        if not secret_key:
            raise PreconditionError("No private key given")
        if not secret_key.startswith(SUI_PRIVATE_KEY_PREFIX):
            raise PreconditionError(
                f"Private key must be a bech32 string starting with '{SUI_PRIVATE_KEY_PREFIX}'"
            )
        try:
            keypair = SuiKeyPair.from_bech32(secret_key)
        except (ValueError, TypeError) as e:
            raise PreconditionError("Malformed Sui private key") from e
        if keypair.scheme != SignatureScheme.ED25519:
            raise PreconditionError(
                f"Unsupported key scheme {keypair.scheme}, only Ed25519 keys are supported"
            )
        return cls(keypair)

    @property
    def public_key(self) -> bytes:
        return bytes(self.keypair.public_key.key_bytes)

    @property
    def address(self) -> str:
        return SuiAddress.from_keypair_string(self.keypair.serialize()).address

    @property
    def secret_key(self) -> str:
        return self.keypair.to_bech32()

    def sign_transaction(self, tx_bytes: str) -> str:
        """Sign base64 encoded TransactionData with the Sui intent, returning a serialized signature."""
        return self.keypair.new_sign_secure(tx_bytes).value
