"""Signing and response classification core."""

from wxpay_lite.core.authorization import (
    AUTH_SCHEME,
    NONCE_LENGTH,
    AuthorizationBuilder,
    NonceSource,
    format_authorization,
    random_nonce,
)
from wxpay_lite.core.canonical import (
    SignatureScheme,
    StringToSign,
    build_message,
    build_string_to_sign,
    select_scheme,
)
from wxpay_lite.core.classifier import (
    LegacyEnvelope,
    ModernEnvelope,
    ResponseEnvelope,
    Verdict,
    classify,
)
from wxpay_lite.core.digest import (
    compute_signature,
    hmac_sha256_sign,
    md5_sign,
    rsa_sha256_sign,
    sign_fields,
    verify_signature,
)
from wxpay_lite.core.fields import (
    SIGN_FIELD,
    FieldSpec,
    extract_signable,
    extract_wire,
    validate_field_set,
)
from wxpay_lite.core.timestamp import (
    UTC8,
    decode_compact,
    decode_rfc3339,
    decode_utc8,
    encode_compact,
    encode_rfc3339,
    encode_utc8,
)

__all__ = [
    "AUTH_SCHEME",
    "AuthorizationBuilder",
    "FieldSpec",
    "LegacyEnvelope",
    "ModernEnvelope",
    "NONCE_LENGTH",
    "NonceSource",
    "ResponseEnvelope",
    "SIGN_FIELD",
    "SignatureScheme",
    "StringToSign",
    "UTC8",
    "Verdict",
    "build_message",
    "build_string_to_sign",
    "classify",
    "compute_signature",
    "decode_compact",
    "decode_rfc3339",
    "decode_utc8",
    "encode_compact",
    "encode_rfc3339",
    "encode_utc8",
    "extract_signable",
    "extract_wire",
    "format_authorization",
    "hmac_sha256_sign",
    "md5_sign",
    "random_nonce",
    "rsa_sha256_sign",
    "select_scheme",
    "sign_fields",
    "validate_field_set",
    "verify_signature",
]
