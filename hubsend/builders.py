"""Builders for MessageData bodies.

Builders are pure: they validate their inputs, stamp the Farcaster time and
return a MessageData ready for encoding. Validation limits match the ones a
hub applies when it ingests the message.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from hubsend.errors import EncodingError, InvalidTimestamp, ValidationError
from hubsend.fctime import MAX_FARCASTER_TIME, get_farcaster_time
from hubsend.hashing import HASH_LENGTH
from hubsend.schema import (
    BODY_FIELD_FOR_TYPE,
    CastAddBody,
    CastId,
    CastRemoveBody,
    CastType,
    Embed,
    LinkBody,
    MessageData,
    MessageType,
    ReactionBody,
    ReactionType,
    UserDataBody,
    UserDataType,
)

MAX_CAST_BYTES = 320
MAX_LONG_CAST_BYTES = 1024
MAX_MENTIONS = 10
MAX_EMBEDS = 2
MAX_URL_BYTES = 256
MAX_USER_DATA_BYTES = {
    UserDataType.PFP: 256,
    UserDataType.DISPLAY: 32,
    UserDataType.BIO: 256,
    UserDataType.URL: 256,
    UserDataType.USERNAME: 20,
}
MAX_LINK_TYPE_BYTES = 8


def _utf8_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _validate_fid(fid: int, what: str = "fid") -> int:
    if not isinstance(fid, int) or isinstance(fid, bool) or fid <= 0:
        raise ValidationError(f"{what} must be a positive integer")
    return fid


def _validate_url(url: str) -> str:
    if not url:
        raise ValidationError("url is missing")
    if _utf8_len(url) > MAX_URL_BYTES:
        raise ValidationError(f"url > {MAX_URL_BYTES} bytes")
    return url


def _validate_hash(value: bytes, what: str = "hash") -> bytes:
    if len(value) != HASH_LENGTH:
        raise ValidationError(f"{what} must be {HASH_LENGTH} bytes")
    return bytes(value)


def make_cast_id(fid: int, hash: bytes):
    return CastId(fid=_validate_fid(fid), hash=_validate_hash(hash))


def _validate_cast_id(cast_id, what: str = "cast_id"):
    if not isinstance(cast_id, CastId):
        raise ValidationError(f"{what} must be a CastId, got {type(cast_id).__name__}")
    _validate_fid(cast_id.fid, f"{what}.fid")
    _validate_hash(cast_id.hash, f"{what}.hash")
    return cast_id


def make_message_data(message_type: int, fid: int, network: int, timestamp: Optional[int] = None, **body):
    """Assemble a MessageData with exactly one body matching ``message_type``.

    ``timestamp`` is Farcaster time; the current time is used when omitted.
    """
    expected = BODY_FIELD_FOR_TYPE.get(message_type)
    if expected is None:
        raise ValidationError(f"unsupported message type {message_type}")
    if list(body) != [expected]:
        raise ValidationError(f"message type {message_type} requires exactly one {expected}")
    _validate_fid(fid)
    if timestamp is None:
        timestamp = get_farcaster_time()
    elif timestamp < 0 or timestamp > MAX_FARCASTER_TIME:
        raise InvalidTimestamp(f"farcaster time {timestamp} does not fit in uint32")

    try:
        return MessageData(
            type=int(message_type),
            fid=fid,
            timestamp=timestamp,
            network=int(network),
            **body,
        )
    except (ValueError, TypeError) as e:
        raise EncodingError(str(e), reason="out_of_range") from e


# ------------------- Casts -------------------

def make_cast_add_body(
    text: str,
    mentions: Sequence[int] = (),
    mentions_positions: Sequence[int] = (),
    embeds: Iterable = (),
    parent_cast_id=None,
    parent_url: Optional[str] = None,
    cast_type: int = CastType.CAST,
):
    text_bytes = _utf8_len(text)
    if cast_type == CastType.CAST and text_bytes > MAX_CAST_BYTES:
        raise ValidationError(f"text > {MAX_CAST_BYTES} bytes")
    if cast_type == CastType.LONG_CAST:
        if text_bytes > MAX_LONG_CAST_BYTES:
            raise ValidationError(f"text > {MAX_LONG_CAST_BYTES} bytes for long cast")
        if text_bytes <= MAX_CAST_BYTES:
            raise ValidationError("text too short for long cast")
    if cast_type not in (CastType.CAST, CastType.LONG_CAST):
        raise ValidationError("invalid cast type")

    embed_msgs = []
    for embed in embeds:
        if isinstance(embed, str):
            embed_msgs.append(Embed(url=_validate_url(embed)))
        elif isinstance(embed, CastId):
            embed_msgs.append(Embed(cast_id=_validate_cast_id(embed, "embed")))
        else:
            raise ValidationError(f"embed must be a url or CastId, got {type(embed).__name__}")
    if len(embed_msgs) > MAX_EMBEDS:
        raise ValidationError(f"embeds > {MAX_EMBEDS}")

    if len(mentions) > MAX_MENTIONS:
        raise ValidationError(f"mentions > {MAX_MENTIONS}")
    if len(mentions) != len(mentions_positions):
        raise ValidationError("mentions and mentions_positions must match")
    for mention in mentions:
        _validate_fid(mention, "mention")
    previous = 0
    for position in mentions_positions:
        if position < 0 or position > text_bytes:
            raise ValidationError("mentions_positions must be a position in text")
        if position < previous:
            raise ValidationError("mentions_positions must be sorted in ascending order")
        previous = position

    if parent_cast_id is not None and parent_url is not None:
        raise ValidationError("cannot use both parent_url and parent_cast_id")
    if not text and not embed_msgs and not mentions:
        raise ValidationError("cast is empty")

    body = CastAddBody(
        text=text,
        mentions=list(mentions),
        mentions_positions=list(mentions_positions),
        embeds=embed_msgs,
        type=int(cast_type),
    )
    if parent_cast_id is not None:
        body.parent_cast_id.CopyFrom(_validate_cast_id(parent_cast_id, "parent_cast_id"))
    elif parent_url is not None:
        body.parent_url = _validate_url(parent_url)
    return body


def make_cast_add_data(text: str, fid: int, network: int, timestamp: Optional[int] = None, **body_options):
    body = make_cast_add_body(text, **body_options)
    return make_message_data(MessageType.CAST_ADD, fid, network, timestamp, cast_add_body=body)


def make_cast_remove_data(target_hash: bytes, fid: int, network: int, timestamp: Optional[int] = None):
    body = CastRemoveBody(target_hash=_validate_hash(target_hash, "target_hash"))
    return make_message_data(MessageType.CAST_REMOVE, fid, network, timestamp, cast_remove_body=body)


# ------------------- Reactions -------------------

def make_reaction_data(
    reaction_type: int,
    fid: int,
    network: int,
    timestamp: Optional[int] = None,
    target_cast_id=None,
    target_url: Optional[str] = None,
    remove: bool = False,
):
    if reaction_type not in (ReactionType.LIKE, ReactionType.RECAST):
        raise ValidationError("invalid reaction type")
    if (target_cast_id is None) == (target_url is None):
        raise ValidationError("reaction needs exactly one of target_cast_id or target_url")

    body = ReactionBody(type=int(reaction_type))
    if target_cast_id is not None:
        body.target_cast_id.CopyFrom(_validate_cast_id(target_cast_id, "target_cast_id"))
    else:
        body.target_url = _validate_url(target_url)
    message_type = MessageType.REACTION_REMOVE if remove else MessageType.REACTION_ADD
    return make_message_data(message_type, fid, network, timestamp, reaction_body=body)


# ------------------- User data -------------------

def make_user_data_data(user_data_type: int, value: str, fid: int, network: int, timestamp: Optional[int] = None):
    limit = MAX_USER_DATA_BYTES.get(user_data_type)
    if limit is None:
        raise ValidationError("invalid user data type")
    if _utf8_len(value) > limit:
        raise ValidationError(f"value > {limit} bytes")
    body = UserDataBody(type=int(user_data_type), value=value)
    return make_message_data(MessageType.USER_DATA_ADD, fid, network, timestamp, user_data_body=body)


# ------------------- Links -------------------

def make_link_data(
    link_type: str,
    target_fid: int,
    fid: int,
    network: int,
    timestamp: Optional[int] = None,
    display_timestamp: Optional[int] = None,
    remove: bool = False,
):
    if not link_type or _utf8_len(link_type) > MAX_LINK_TYPE_BYTES:
        raise ValidationError(f"link type must be 1-{MAX_LINK_TYPE_BYTES} bytes")
    body = LinkBody(type=link_type, target_fid=_validate_fid(target_fid, "target_fid"))
    if display_timestamp is not None:
        body.display_timestamp = display_timestamp
    message_type = MessageType.LINK_REMOVE if remove else MessageType.LINK_ADD
    return make_message_data(message_type, fid, network, timestamp, link_body=body)
