#!/usr/bin/env python3
"""hubsend: sign a cast and submit it to a hub.

Usage:
    HUBSEND_SEED=<hex seed> hubsend "Welcome to Go!"
    hubsend --endpoint http://127.0.0.1:2281/v1/submitMessage --fid 6833 "gm"
    hubsend --dry-run "gm"
"""

import argparse
import sys

from hubsend.client import submit_cast
from hubsend.config import NETWORKS, load_config
from hubsend.errors import HubSendError, NonSuccessStatus


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sign a cast and submit it to a hub")
    parser.add_argument("text", help="Cast text")
    parser.add_argument("--endpoint", "-e", help="submitMessage URL (default: $HUBSEND_ENDPOINT)")
    parser.add_argument("--fid", type=int, help="Author fid (default: $HUBSEND_FID)")
    parser.add_argument("--network", "-n", choices=sorted(NETWORKS), help="Farcaster network")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds, 0 for none")
    parser.add_argument("--seed-encoding", choices=["hex", "base64"], help="Encoding of $HUBSEND_SEED")
    parser.add_argument("--dry-run", action="store_true", help="Build and sign, but don't send")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(
            endpoint=args.endpoint,
            fid=args.fid,
            network=args.network,
            timeout=args.timeout,
            seed_encoding=args.seed_encoding,
        )
        if not args.dry_run:
            print(f"Submitting cast to {config.endpoint}...", flush=True)
        result = submit_cast(args.text, config, dry_run=args.dry_run)
    except NonSuccessStatus as e:
        print(f"❌ Hub rejected message: HTTP {e.status}", file=sys.stderr, flush=True)
        return 1
    except HubSendError as e:
        print(f"❌ {e}", file=sys.stderr, flush=True)
        return 1

    if args.dry_run:
        print(f"hash: {result.hash_hex}")
        print(f"envelope: {result.envelope.hex()}")
    else:
        print(f"✅ Message submitted (HTTP {result.status}) hash={result.hash_hex}", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
