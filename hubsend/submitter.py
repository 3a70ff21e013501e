"""Message submitters.

A submitter takes serialized envelope bytes and delivers them somewhere.
``HttpSubmitter`` POSTs them to a hub once: no retries, and only the status
code of the response is looked at.
"""

from __future__ import annotations

import abc
import http.client
import urllib.error
import urllib.request
from typing import Optional

from hubsend.errors import NonSuccessStatus, TransportError
from hubsend.log import get_logger

log = get_logger(__name__)

CONTENT_TYPE = "application/octet-stream"
DEFAULT_TIMEOUT = 10  # seconds


class MessageSubmitter(abc.ABC):
    @abc.abstractmethod
    def submit(self, envelope: bytes) -> int:
        """Deliver ``envelope``; return the HTTP-style status on success."""


class HttpSubmitter(MessageSubmitter):
    def __init__(self, url: str, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.url = url
        # 0 disables the timeout, as HUBSEND_TIMEOUT=0 does
        self.timeout = timeout or None

    def submit(self, envelope: bytes) -> int:
        headers = {
            "Content-Type": CONTENT_TYPE,
        }
        req = urllib.request.Request(self.url, data=bytes(envelope), headers=headers, method="POST")
        log.info("[SUBMIT] POST %s (%d bytes)", self.url, len(envelope))
        try:
            # the context manager closes the response on every path
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                status = resp.status
        except urllib.error.HTTPError as e:
            e.close()
            log.warning("[SUBMIT] HTTP %s from %s", e.code, self.url)
            raise NonSuccessStatus(e.code, f"HTTP {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            log.warning("[SUBMIT] connection error: %s", e.reason)
            raise TransportError(f"connection error: {e.reason}") from e
        except (OSError, http.client.HTTPException) as e:
            log.warning("[SUBMIT] transport error: %s", e)
            raise TransportError(str(e) or type(e).__name__) from e

        if status != 200:
            raise NonSuccessStatus(status)
        log.info("[SUBMIT] accepted (HTTP %s)", status)
        return status
