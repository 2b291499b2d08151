"""
Session Token Issuer

Produces opaque, reasonably unique session tokens bound to an account id
and the issue time. These are not signed and carry no security guarantee.
"""

import base64
import secrets
import time
from typing import Callable

from .accounts import Account


class TokenIssuer:
    """Base64 token of ``<account id>:<issue time in ms>:<nonce>``."""

    def __init__(self, clock: Callable[[], float] = time.time, nonce_bytes: int = 4):
        self._clock = clock
        self._nonce_bytes = nonce_bytes

    def issue(self, account: Account) -> str:
        issued_ms = int(self._clock() * 1000)
        raw = f"{account.id}:{issued_ms}:{secrets.token_hex(self._nonce_bytes)}"
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")
