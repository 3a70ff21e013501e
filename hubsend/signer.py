"""Ed25519 message signer.

Implements:
- seed decoding (hex or base64) with strict 32-byte length checking
- deterministic key pair derivation from the seed
- signing and verification of 20-byte message hashes

The signer never sees the message body, only its hash.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from hubsend.errors import InvalidKeyEncoding, InvalidKeyLength
from hubsend.schema import SignatureScheme

SEED_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


def _b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"), validate=True)


def _hexd(s: str) -> bytes:
    s = s.strip()
    if s[:2].lower() == "0x":
        s = s[2:]
    return bytes.fromhex(s)


_DECODERS = {
    "hex": _hexd,
    "base64": _b64d,
}


def decode_seed(text: str, encoding: str = "hex") -> bytes:
    decoder = _DECODERS.get(encoding)
    if decoder is None:
        raise InvalidKeyEncoding(f"unknown seed encoding {encoding!r}")
    try:
        seed = decoder(text)
    except (ValueError, TypeError, AttributeError, binascii.Error) as e:
        raise InvalidKeyEncoding(f"seed is not valid {encoding}") from e
    if len(seed) != SEED_LENGTH:
        raise InvalidKeyLength(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
    return seed


def signer_public_key(priv: Ed25519PrivateKey) -> bytes:
    # Ed25519 raw public key is 32 bytes
    return priv.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def verify_hash_signature(public_key: bytes, signature: bytes, msg_hash: bytes) -> bool:
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    try:
        Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(bytes(signature), bytes(msg_hash))
        return True
    except InvalidSignature:
        return False


@dataclass(frozen=True)
class Ed25519Signer:
    priv: Ed25519PrivateKey
    scheme: int = SignatureScheme.ED25519

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Signer":
        if len(seed) != SEED_LENGTH:
            raise InvalidKeyLength(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        return cls(priv=Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def from_seed_text(cls, text: str, encoding: str = "hex") -> "Ed25519Signer":
        return cls.from_seed(decode_seed(text, encoding))

    @property
    def public_key(self) -> bytes:
        return signer_public_key(self.priv)

    def sign_hash(self, msg_hash: bytes) -> bytes:
        return self.priv.sign(bytes(msg_hash))
