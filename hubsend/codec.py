"""Canonical protobuf encoding for MessageData (body) and Message (envelope)."""

from __future__ import annotations

from google.protobuf.message import DecodeError, EncodeError

from hubsend.errors import EncodingError
from hubsend.hashing import HASH_LENGTH
from hubsend.schema import (
    BODY_FIELD_FOR_TYPE,
    FarcasterNetwork,
    HashScheme,
    Message,
    MessageData,
    MessageType,
    SignatureScheme,
)


def _serialize(msg) -> bytes:
    try:
        return msg.SerializeToString(deterministic=True)
    except (EncodeError, ValueError, TypeError) as e:
        raise EncodingError(str(e)) from e


def _parse(cls, data: bytes):
    if not isinstance(data, (bytes, bytearray)):
        raise EncodingError(f"expected bytes, got {type(data).__name__}")
    try:
        return cls.FromString(bytes(data))
    except DecodeError as e:
        raise EncodingError(str(e), reason="decode_failed") from e


def check_message_data(data) -> None:
    if data.type == MessageType.NONE:
        raise EncodingError("type is missing", reason="missing_field")
    if data.fid == 0:
        raise EncodingError("fid is missing", reason="missing_field")
    if data.network == FarcasterNetwork.NONE:
        raise EncodingError("network is missing", reason="missing_field")

    expected = BODY_FIELD_FOR_TYPE.get(data.type)
    if expected is None:
        raise EncodingError(f"unsupported message type {data.type}", reason="invalid_type")
    body = data.WhichOneof("body")
    if body is None:
        raise EncodingError("body is missing", reason="missing_field")
    if body != expected:
        raise EncodingError(f"{body} does not match type {data.type}", reason="body_type_mismatch")


def check_message(msg) -> None:
    if not msg.data_bytes:
        raise EncodingError("data_bytes is missing", reason="missing_field")
    if len(msg.hash) != HASH_LENGTH:
        raise EncodingError(f"hash must be {HASH_LENGTH} bytes", reason="invalid_hash_length")
    if msg.hash_scheme == HashScheme.NONE:
        raise EncodingError("hash_scheme is missing", reason="missing_field")
    if not msg.signature:
        raise EncodingError("signature is missing", reason="missing_field")
    if msg.signature_scheme == SignatureScheme.NONE:
        raise EncodingError("signature_scheme is missing", reason="missing_field")
    if not msg.signer:
        raise EncodingError("signer is missing", reason="missing_field")


def encode_message_data(data) -> bytes:
    check_message_data(data)
    return _serialize(data)


def decode_message_data(raw: bytes):
    data = _parse(MessageData, raw)
    check_message_data(data)
    return data


def encode_message(msg) -> bytes:
    check_message(msg)
    return _serialize(msg)


def decode_message(raw: bytes):
    """Parse an envelope. Legacy envelopes carrying ``data`` instead of
    ``data_bytes`` are normalised so ``data_bytes`` is always populated."""
    msg = _parse(Message, raw)
    if not msg.data_bytes and msg.HasField("data"):
        msg.data_bytes = _serialize(msg.data)
        msg.ClearField("data")
    check_message(msg)
    return msg
