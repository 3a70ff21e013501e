#!/usr/bin/env python3
"""Local hub stub for trying out submissions without a real hub.

Endpoints:
- GET  /v1/info           -> capability card
- POST /v1/submitMessage  -> verify an octet-stream envelope; 200 on success,
                             400 with {"error": <reason>} otherwise

Accepted messages are kept in memory (hash hex -> MessageData) for the life
of the process. Nothing is forwarded or persisted.
"""

import argparse
import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

from hubsend.codec import decode_message
from hubsend.errors import EncodingError, VerificationError
from hubsend.envelope import verify_message
from hubsend.log import get_logger

log = get_logger(__name__)

SUBMIT_PATH = "/v1/submitMessage"
INFO_PATH = "/v1/info"
MAX_BODY_BYTES = 64 * 1024

CARD = {
    "name": "hubsend-stub",
    "version": "1.0",
    "features": ["submit-message", "blake3-20", "ed25519"],
}


class HubState:
    def __init__(self):
        self.lock = threading.Lock()
        self.messages = {}

    def add(self, hash_hex: str, data) -> None:
        with self.lock:
            self.messages[hash_hex] = data


class Handler(BaseHTTPRequestHandler):
    state = None  # set by make_server

    def _json(self, code: int, payload: dict):
        body = json.dumps(payload).encode()
        self.send_response(code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path == INFO_PATH:
            return self._json(200, {**CARD, "messages": len(self.state.messages)})
        return self._json(404, {"error": "not_found"})

    def do_POST(self):
        if self.path != SUBMIT_PATH:
            return self._json(404, {"error": "not_found"})

        content_type = self.headers.get("Content-Type", "")
        if content_type.split(";")[0].strip() != "application/octet-stream":
            return self._json(415, {"error": "unsupported_content_type"})

        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            length = 0
        if length <= 0 or length > MAX_BODY_BYTES:
            return self._json(400, {"error": "invalid_content_length"})
        body = self.rfile.read(length)

        try:
            msg = decode_message(body)
            data = verify_message(msg)
        except (EncodingError, VerificationError) as e:
            log.info("[HUB] rejected: %s", e)
            return self._json(400, {"error": e.reason})

        hash_hex = "0x" + msg.hash.hex()
        self.state.add(hash_hex, data)
        log.info("[HUB] accepted %s fid=%d type=%d", hash_hex, data.fid, data.type)
        return self._json(200, {"hash": hash_hex, "fid": data.fid, "type": data.type})

    def log_message(self, format, *args):
        log.debug("[HTTP] %s", args[0] if args else format)


def make_server(host: str = "127.0.0.1", port: int = 2281, state: HubState = None) -> HTTPServer:
    """Create (but don't start) a stub hub bound to ``host:port``; port 0 picks a free one."""
    handler = type("BoundHandler", (Handler,), {"state": state or HubState()})
    return HTTPServer((host, port), handler)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Local hub stub that verifies submitted messages")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=2281)
    args = parser.parse_args(argv)

    server = make_server(args.host, args.port)
    print(f"hubsend stub hub listening on http://{args.host}:{args.port}{SUBMIT_PATH}", flush=True)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


if __name__ == "__main__":
    main()
