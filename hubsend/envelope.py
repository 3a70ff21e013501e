"""Envelope assembly and verification.

The envelope (``Message``) carries the body as the exact bytes that were
hashed (``data_bytes``), the 20-byte hash, the signature over that hash, the
signer's public key, and the scheme tags a receiver needs to check them.
"""

from __future__ import annotations

from hubsend.codec import check_message, decode_message_data, encode_message_data
from hubsend.errors import EncodingError, UnsupportedScheme, VerificationError
from hubsend.hashing import message_hash
from hubsend.schema import HashScheme, Message, SignatureScheme
from hubsend.signer import verify_hash_signature

# signature_scheme tag -> verifier(public_key, signature, hash)
SIGNATURE_VERIFIERS = {
    SignatureScheme.ED25519: verify_hash_signature,
}


def make_message(data, signer, hash_scheme: int = HashScheme.BLAKE3):
    """Encode ``data``, hash it, sign the hash and wrap it all in a Message."""
    data_bytes = encode_message_data(data)
    msg_hash = message_hash(data_bytes, hash_scheme)
    signature = signer.sign_hash(msg_hash)
    return Message(
        data_bytes=data_bytes,
        hash=msg_hash,
        hash_scheme=int(hash_scheme),
        signature=signature,
        signature_scheme=int(signer.scheme),
        signer=signer.public_key,
    )


def verify_message(msg):
    """Check an envelope the way a receiving hub does and return its MessageData.

    Raises VerificationError with a reason code on the first failed check.
    """
    try:
        check_message(msg)
    except EncodingError as e:
        raise VerificationError(e.detail, reason=e.reason) from e

    try:
        recomputed = message_hash(msg.data_bytes, msg.hash_scheme)
    except UnsupportedScheme as e:
        raise VerificationError(e.detail, reason="invalid_hash_scheme") from e
    if recomputed != msg.hash:
        raise VerificationError("hash does not match data_bytes", reason="invalid_hash")

    verifier = SIGNATURE_VERIFIERS.get(msg.signature_scheme)
    if verifier is None:
        raise VerificationError(f"signature scheme {msg.signature_scheme} is not supported", reason="invalid_signature_scheme")
    if not verifier(msg.signer, msg.signature, msg.hash):
        raise VerificationError("signature does not match hash and signer", reason="invalid_signature")

    try:
        return decode_message_data(msg.data_bytes)
    except EncodingError as e:
        raise VerificationError(e.detail, reason="invalid_data") from e
