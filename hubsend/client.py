"""Build, sign and submit a message in one pass.

Every step either succeeds or raises a HubSendError; nothing is submitted
unless the whole envelope was built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hubsend.builders import make_cast_add_data
from hubsend.codec import encode_message
from hubsend.config import PLACEHOLDER_SEED_BYTES, SubmitConfig
from hubsend.envelope import make_message
from hubsend.errors import ConfigError
from hubsend.fctime import get_farcaster_time
from hubsend.log import get_logger
from hubsend.schema import HashScheme
from hubsend.signer import Ed25519Signer, decode_seed
from hubsend.submitter import HttpSubmitter, MessageSubmitter

log = get_logger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    hash: bytes
    envelope: bytes
    status: Optional[int] = None  # None when nothing was sent (dry run)

    @property
    def hash_hex(self) -> str:
        return "0x" + self.hash.hex()


def signer_from_config(config: SubmitConfig) -> Ed25519Signer:
    seed = decode_seed(config.seed, config.seed_encoding)
    if seed == PLACEHOLDER_SEED_BYTES:
        raise ConfigError("set HUBSEND_SEED to your signer's 32-byte seed", reason="placeholder_seed")
    return Ed25519Signer.from_seed(seed)


def submit_message(data, signer, submitter: Optional[MessageSubmitter], hash_scheme: int = HashScheme.BLAKE3) -> SubmitResult:
    msg = make_message(data, signer, hash_scheme)
    envelope = encode_message(msg)
    result = SubmitResult(hash=msg.hash, envelope=envelope)
    if submitter is None:
        return result

    log.info("[SUBMIT] fid=%d type=%d hash=%s", data.fid, data.type, result.hash_hex)
    status = submitter.submit(envelope)
    return SubmitResult(hash=result.hash, envelope=envelope, status=status)


def submit_cast(
    text: str,
    config: SubmitConfig,
    submitter: Optional[MessageSubmitter] = None,
    now: Optional[float] = None,
    dry_run: bool = False,
    signer: Optional[Ed25519Signer] = None,
) -> SubmitResult:
    """Sign a CastAdd with ``text`` and post it to ``config.endpoint``.

    ``now`` (Unix seconds) pins the timestamp; ``submitter`` replaces the
    HTTP transport; ``dry_run`` builds the envelope without sending it.
    """
    signer = signer or signer_from_config(config)
    data = make_cast_add_data(text, config.fid, config.network, get_farcaster_time(now))
    if dry_run:
        submitter = None
    elif submitter is None:
        submitter = HttpSubmitter(config.endpoint, timeout=config.timeout)
    return submit_message(data, signer, submitter)
