"""Protobuf schema for hub messages.

The descriptors are assembled at import time from the tables below and
registered in a private descriptor pool, so no protoc step is needed. Field
numbers mirror the hub's ``message.proto`` and must not change.
"""

from __future__ import annotations

from enum import IntEnum

from google.protobuf import descriptor_pb2, descriptor_pool
from google.protobuf.message_factory import GetMessageClass

PACKAGE = "farcaster"

# ------------------- Enums -------------------

_ENUMS = {
    "HashScheme": ("HASH_SCHEME", {"NONE": 0, "BLAKE3": 1}),
    "SignatureScheme": ("SIGNATURE_SCHEME", {"NONE": 0, "ED25519": 1, "EIP712": 2}),
    "MessageType": (
        "MESSAGE_TYPE",
        {
            "NONE": 0,
            "CAST_ADD": 1,
            "CAST_REMOVE": 2,
            "REACTION_ADD": 3,
            "REACTION_REMOVE": 4,
            "LINK_ADD": 5,
            "LINK_REMOVE": 6,
            "USER_DATA_ADD": 11,
        },
    ),
    "FarcasterNetwork": ("FARCASTER_NETWORK", {"NONE": 0, "MAINNET": 1, "TESTNET": 2, "DEVNET": 3}),
    "ReactionType": ("REACTION_TYPE", {"NONE": 0, "LIKE": 1, "RECAST": 2}),
    "UserDataType": (
        "USER_DATA_TYPE",
        {"NONE": 0, "PFP": 1, "DISPLAY": 2, "BIO": 3, "URL": 5, "USERNAME": 6},
    ),
    "CastType": ("CAST_TYPE", {"CAST": 0, "LONG_CAST": 1}),
}

HashScheme = IntEnum("HashScheme", _ENUMS["HashScheme"][1])
SignatureScheme = IntEnum("SignatureScheme", _ENUMS["SignatureScheme"][1])
MessageType = IntEnum("MessageType", _ENUMS["MessageType"][1])
FarcasterNetwork = IntEnum("FarcasterNetwork", _ENUMS["FarcasterNetwork"][1])
ReactionType = IntEnum("ReactionType", _ENUMS["ReactionType"][1])
UserDataType = IntEnum("UserDataType", _ENUMS["UserDataType"][1])
CastType = IntEnum("CastType", _ENUMS["CastType"][1])

# ------------------- Messages -------------------
# (field name, number, kind[, "repeated" | "oneof:<name>"])

_MESSAGES = {
    "CastId": [
        ("fid", 1, "uint64"),
        ("hash", 2, "bytes"),
    ],
    "Embed": [
        ("url", 1, "string", "oneof:embed"),
        ("cast_id", 2, "CastId", "oneof:embed"),
    ],
    "CastAddBody": [
        ("embeds_deprecated", 1, "string", "repeated"),
        ("mentions", 2, "uint64", "repeated"),
        ("parent_cast_id", 3, "CastId", "oneof:parent"),
        ("text", 4, "string"),
        ("mentions_positions", 5, "uint32", "repeated"),
        ("embeds", 6, "Embed", "repeated"),
        ("parent_url", 7, "string", "oneof:parent"),
        ("type", 8, "CastType"),
    ],
    "CastRemoveBody": [
        ("target_hash", 1, "bytes"),
    ],
    "ReactionBody": [
        ("type", 1, "ReactionType"),
        ("target_cast_id", 2, "CastId", "oneof:target"),
        ("target_url", 3, "string", "oneof:target"),
    ],
    "UserDataBody": [
        ("type", 1, "UserDataType"),
        ("value", 2, "string"),
    ],
    "LinkBody": [
        ("type", 1, "string"),
        ("display_timestamp", 2, "uint32"),
        ("target_fid", 3, "uint64", "oneof:target"),
    ],
    "MessageData": [
        ("type", 1, "MessageType"),
        ("fid", 2, "uint64"),
        ("timestamp", 3, "uint32"),
        ("network", 4, "FarcasterNetwork"),
        ("cast_add_body", 5, "CastAddBody", "oneof:body"),
        ("cast_remove_body", 6, "CastRemoveBody", "oneof:body"),
        ("reaction_body", 7, "ReactionBody", "oneof:body"),
        ("user_data_body", 12, "UserDataBody", "oneof:body"),
        ("link_body", 14, "LinkBody", "oneof:body"),
    ],
    "Message": [
        ("data", 1, "MessageData"),
        ("hash", 2, "bytes"),
        ("hash_scheme", 3, "HashScheme"),
        ("signature", 4, "bytes"),
        ("signature_scheme", 5, "SignatureScheme"),
        ("signer", 6, "bytes"),
        ("data_bytes", 7, "bytes"),
    ],
}

_FieldProto = descriptor_pb2.FieldDescriptorProto

_SCALARS = {
    "bytes": _FieldProto.TYPE_BYTES,
    "string": _FieldProto.TYPE_STRING,
    "uint32": _FieldProto.TYPE_UINT32,
    "uint64": _FieldProto.TYPE_UINT64,
}


def _add_field(msg_proto, oneofs, field_def) -> None:
    name, number, kind = field_def[:3]
    flag = field_def[3] if len(field_def) > 3 else ""

    field = msg_proto.field.add(name=name, number=number)
    field.label = _FieldProto.LABEL_REPEATED if flag == "repeated" else _FieldProto.LABEL_OPTIONAL
    if kind in _SCALARS:
        field.type = _SCALARS[kind]
    elif kind in _ENUMS:
        field.type = _FieldProto.TYPE_ENUM
        field.type_name = f".{PACKAGE}.{kind}"
    else:
        field.type = _FieldProto.TYPE_MESSAGE
        field.type_name = f".{PACKAGE}.{kind}"

    if flag.startswith("oneof:"):
        oneof_name = flag.split(":", 1)[1]
        if oneof_name not in oneofs:
            oneofs.append(oneof_name)
            msg_proto.oneof_decl.add(name=oneof_name)
        field.oneof_index = oneofs.index(oneof_name)


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(name="hubsend/message.proto", package=PACKAGE, syntax="proto3")
    for enum_name, (prefix, values) in _ENUMS.items():
        enum_proto = fdp.enum_type.add(name=enum_name)
        for value_name, number in values.items():
            enum_proto.value.add(name=f"{prefix}_{value_name}", number=number)
    for msg_name, fields in _MESSAGES.items():
        msg_proto = fdp.message_type.add(name=msg_name)
        oneofs = []
        for field_def in fields:
            _add_field(msg_proto, oneofs, field_def)
    return fdp


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(build_file_descriptor().SerializeToString())


def _message_class(name: str):
    return GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.{name}"))


CastId = _message_class("CastId")
Embed = _message_class("Embed")
CastAddBody = _message_class("CastAddBody")
CastRemoveBody = _message_class("CastRemoveBody")
ReactionBody = _message_class("ReactionBody")
UserDataBody = _message_class("UserDataBody")
LinkBody = _message_class("LinkBody")
MessageData = _message_class("MessageData")
Message = _message_class("Message")

# MessageData oneof member carrying the body for each message type
BODY_FIELD_FOR_TYPE = {
    MessageType.CAST_ADD: "cast_add_body",
    MessageType.CAST_REMOVE: "cast_remove_body",
    MessageType.REACTION_ADD: "reaction_body",
    MessageType.REACTION_REMOVE: "reaction_body",
    MessageType.LINK_ADD: "link_body",
    MessageType.LINK_REMOVE: "link_body",
    MessageType.USER_DATA_ADD: "user_data_body",
}
