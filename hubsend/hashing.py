"""Message hashing: BLAKE3 truncated to 20 bytes."""

from __future__ import annotations

from blake3 import blake3

from hubsend.errors import UnsupportedScheme
from hubsend.schema import HashScheme

HASH_LENGTH = 20

_HASHERS = {
    HashScheme.BLAKE3: lambda data: blake3(data).digest(length=HASH_LENGTH),
}


def message_hash(data_bytes: bytes, scheme: int = HashScheme.BLAKE3) -> bytes:
    hasher = _HASHERS.get(scheme)
    if hasher is None:
        raise UnsupportedScheme(f"hash scheme {int(scheme)} is not supported")
    return hasher(bytes(data_bytes))


def supported_hash_schemes():
    return sorted(_HASHERS)
