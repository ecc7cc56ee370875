"""Signature computation for the three gateway schemes."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Any, Mapping, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from wxpay_lite.core.canonical import SignatureScheme, StringToSign, build_string_to_sign
from wxpay_lite.core.fields import SIGN_FIELD, FieldSpec, fields_from_mapping
from wxpay_lite.credentials import MerchantCertificate
from wxpay_lite.exceptions import MissingCredential


def md5_sign(message: str) -> str:
    """Uppercase hex MD5 of ``message``."""
    return hashlib.md5(message.encode("utf-8")).hexdigest().upper()


def hmac_sha256_sign(message: str, secret: str) -> str:
    """Uppercase hex HMAC-SHA256 of ``message`` keyed with ``secret``."""
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest().upper()


def rsa_sha256_sign(message: str, certificate: Optional[MerchantCertificate]) -> str:
    """Base64 RSASSA-PKCS1-v1_5 SHA-256 signature of ``message``.

    Raises:
        MissingCredential: If no certificate is loaded.
    """
    if certificate is None:
        raise MissingCredential("certificate")
    signature = certificate.private_key.sign(
        message.encode("utf-8"),
        padding.PKCS1v15(),
        hashes.SHA256(),
    )
    return base64.b64encode(signature).decode("ascii")


def compute_signature(
    string_to_sign: StringToSign,
    secret: str = "",
    certificate: Optional[MerchantCertificate] = None,
) -> str:
    """Sign ``string_to_sign`` with the scheme it carries."""
    if string_to_sign.scheme is SignatureScheme.RSA_SHA256:
        return rsa_sha256_sign(string_to_sign.value, certificate)
    if string_to_sign.scheme is SignatureScheme.HMAC_SHA256:
        return hmac_sha256_sign(string_to_sign.value, secret)
    return md5_sign(string_to_sign.value)


def sign_fields(fields: list[FieldSpec], secret: str) -> str:
    """Compute the legacy ``sign`` value for a request's field set."""
    return compute_signature(build_string_to_sign(fields, secret), secret=secret)


def verify_signature(data: Mapping[str, Any], secret: str) -> bool:
    """Check the ``sign`` of a message received from the gateway.

    The scheme follows the message's own ``sign_type`` field, like outgoing
    requests. Comparison is constant-time.
    """
    received = data.get(SIGN_FIELD)
    if not received:
        return False
    expected = sign_fields(fields_from_mapping(data), secret)
    return hmac.compare_digest(str(received).upper(), expected)
