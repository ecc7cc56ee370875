"""Canonical string-to-sign construction.

Legacy requests are signed over their fields sorted by wire name and joined
as ``name=value`` pairs, with the merchant key appended:

    amount=100&appid=A&desc=test&key=K

Modern requests are signed over a newline-delimited block instead, see
:func:`build_message`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import structlog

from wxpay_lite.core.fields import FieldSpec, extract_signable, stringify

logger = structlog.get_logger(__name__)

SIGN_TYPE_FIELD = "sign_type"


class SignatureScheme(str, Enum):
    """Signature algorithms understood by the gateway."""

    MD5 = "MD5"
    HMAC_SHA256 = "HMAC-SHA256"
    RSA_SHA256 = "RSA-SHA256"

    @classmethod
    def from_sign_type(cls, value: str | None) -> "SignatureScheme":
        """Map a legacy ``sign_type`` value to a scheme.

        Anything other than ``HMAC-SHA256`` (including absent or unknown
        values) selects MD5.
        """
        if value == cls.HMAC_SHA256.value:
            return cls.HMAC_SHA256
        return cls.MD5


@dataclass(frozen=True)
class StringToSign:
    """The exact text a signature is computed over, and the scheme to use."""

    value: str
    scheme: SignatureScheme

    def __str__(self) -> str:
        return self.value


def select_scheme(fields: Iterable[FieldSpec]) -> SignatureScheme:
    """Pick the legacy scheme from the unfiltered field set's ``sign_type``."""
    for f in fields:
        if f.name == SIGN_TYPE_FIELD:
            return SignatureScheme.from_sign_type(stringify(f.value))
    return SignatureScheme.MD5


def build_string_to_sign(fields: Iterable[FieldSpec], secret: str) -> StringToSign:
    """Build the legacy canonical string for ``fields`` signed with ``secret``.

    Pairs are sorted by name in code-point order, which for the ASCII wire
    names the gateway uses is byte order.
    """
    fields = list(fields)
    scheme = select_scheme(fields)
    pairs = sorted(extract_signable(fields), key=lambda pair: pair[0])

    joined = "&".join(f"{name}={value}" for name, value in pairs)
    if joined:
        joined += "&"
    joined += f"key={secret}"

    logger.debug(
        "string_to_sign_built",
        scheme=scheme.value,
        signed_fields=[name for name, _ in pairs],
    )
    return StringToSign(joined, scheme)


def build_message(method: str, path: str, timestamp: str, nonce: str, body: str) -> StringToSign:
    """Build the modern signing block.

    Every line, the body included, ends with ``\\n``. ``path`` is the URL
    path plus query string, without scheme and host.
    """
    value = f"{method}\n{path}\n{timestamp}\n{nonce}\n{body}\n"
    return StringToSign(value, SignatureScheme.RSA_SHA256)
