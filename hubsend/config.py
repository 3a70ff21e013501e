"""Configuration for the submit flow.

Defaults come from the CONFIG block below; each can be overridden with an
``HUBSEND_*`` environment variable or an explicit keyword argument.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from hubsend.errors import ConfigError, InvalidKeyEncoding, InvalidKeyLength
from hubsend.schema import FarcasterNetwork
from hubsend.signer import SEED_LENGTH, decode_seed
from hubsend.submitter import DEFAULT_TIMEOUT

# ============ CONFIG ============
DEFAULT_ENDPOINT = "http://127.0.0.1:2281/v1/submitMessage"
# Replace with your app's 32-byte Ed25519 signer seed (hex)
PLACEHOLDER_SEED = "0x" + "00" * 32
PLACEHOLDER_SEED_BYTES = bytes(SEED_LENGTH)
DEFAULT_FID = 6833
DEFAULT_NETWORK = "mainnet"
# ================================

NETWORKS = {
    "mainnet": FarcasterNetwork.MAINNET,
    "testnet": FarcasterNetwork.TESTNET,
    "devnet": FarcasterNetwork.DEVNET,
}


@dataclass(frozen=True)
class SubmitConfig:
    endpoint: str = DEFAULT_ENDPOINT
    seed: str = PLACEHOLDER_SEED
    seed_encoding: str = "hex"
    fid: int = DEFAULT_FID
    network: int = NETWORKS[DEFAULT_NETWORK]
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def has_placeholder_seed(self) -> bool:
        """True when the seed decodes to the all-zero placeholder key, in any spelling."""
        try:
            return decode_seed(self.seed, self.seed_encoding) == PLACEHOLDER_SEED_BYTES
        except (InvalidKeyEncoding, InvalidKeyLength):
            return False


def parse_network(value) -> int:
    if isinstance(value, int):
        if value not in NETWORKS.values():
            raise ConfigError(f"unknown network {value}")
        return FarcasterNetwork(value)
    network = NETWORKS.get(str(value).strip().lower())
    if network is None:
        raise ConfigError(f"unknown network {value!r} (expected one of {', '.join(NETWORKS)})")
    return network


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _parse_timeout(value: str) -> Optional[float]:
    if value.strip().lower() in ("", "none", "0"):
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"HUBSEND_TIMEOUT must be a number, got {value!r}") from e


def load_config(environ: Mapping[str, str] = os.environ, **overrides) -> SubmitConfig:
    cfg = SubmitConfig(
        endpoint=environ.get("HUBSEND_ENDPOINT", DEFAULT_ENDPOINT),
        seed=environ.get("HUBSEND_SEED", PLACEHOLDER_SEED),
        seed_encoding=environ.get("HUBSEND_SEED_ENCODING", "hex"),
        fid=_parse_int("HUBSEND_FID", environ.get("HUBSEND_FID", str(DEFAULT_FID))),
        network=parse_network(environ.get("HUBSEND_NETWORK", DEFAULT_NETWORK)),
        timeout=_parse_timeout(environ.get("HUBSEND_TIMEOUT", str(DEFAULT_TIMEOUT))),
    )
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "network" in overrides:
        overrides["network"] = parse_network(overrides["network"])
    if overrides.get("timeout") == 0:
        overrides["timeout"] = None
    try:
        cfg = replace(cfg, **overrides)
    except TypeError as e:
        raise ConfigError(str(e)) from e
    if cfg.fid <= 0:
        raise ConfigError("fid must be positive")
    return cfg
