"""``Authorization`` header for the modern (JSON) protocol.

Format::

    WECHATPAY2-SHA256-RSA2048 mchid="...",nonce_str="...",signature="...",timestamp="...",serial_no="..."
"""

from __future__ import annotations

import secrets
import string
import time
from typing import Callable, Optional, Protocol

from wxpay_lite.core.canonical import build_message
from wxpay_lite.core.digest import rsa_sha256_sign
from wxpay_lite.credentials import MerchantCertificate
from wxpay_lite.exceptions import MissingCredential

AUTH_SCHEME = "WECHATPAY2-SHA256-RSA2048"

NONCE_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
NONCE_LENGTH = 32


class NonceSource(Protocol):
    """Anything that returns a fresh random string of the requested length."""

    def __call__(self, length: int = NONCE_LENGTH) -> str: ...


def random_nonce(length: int = NONCE_LENGTH) -> str:
    """Alphanumeric nonce drawn from the OS CSPRNG."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


def format_authorization(
    mch_id: str,
    nonce: str,
    timestamp: str,
    signature: str,
    serial_no: str,
) -> str:
    """Render the header value. No whitespace besides the one after the scheme."""
    return (
        f'{AUTH_SCHEME} mchid="{mch_id}",nonce_str="{nonce}",'
        f'signature="{signature}",timestamp="{timestamp}",serial_no="{serial_no}"'
    )


class AuthorizationBuilder:
    """Builds a signed ``Authorization`` header per request.

    One nonce draw and one clock read happen per call; both sources are
    injectable so tests can pin the exact header.
    """

    def __init__(
        self,
        mch_id: str,
        certificate: Optional[MerchantCertificate],
        nonce_source: NonceSource = random_nonce,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.mch_id = mch_id
        self.certificate = certificate
        self.nonce_source = nonce_source
        self.clock = clock

    def build(self, method: str, path: str, body: str = "") -> str:
        """Sign ``method``/``path``/``body`` and return the header value.

        Raises:
            MissingCredential: If no certificate is loaded.
        """
        if self.certificate is None:
            raise MissingCredential("certificate")

        nonce = self.nonce_source(NONCE_LENGTH)
        timestamp = str(int(self.clock()))
        message = build_message(method.upper(), path, timestamp, nonce, body)
        signature = rsa_sha256_sign(message.value, self.certificate)
        return format_authorization(
            self.mch_id, nonce, timestamp, signature, self.certificate.serial_no
        )
