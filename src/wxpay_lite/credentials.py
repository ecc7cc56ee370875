"""Merchant credentials and signing modes.

The credential is configured once and is read-only afterwards. A client
picks exactly one :data:`SigningMode` at construction time:

- :class:`LegacySigning` signs XML requests with the shared secret
  (MD5 or HMAC-SHA256).
- :class:`ModernSigning` signs JSON requests with the merchant's RSA
  private key and sends an ``Authorization`` header.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from wxpay_lite.exceptions import InvalidCredential, MissingCredential


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("ascii") if isinstance(data, str) else data


@dataclass(frozen=True)
class MerchantCertificate:
    """Merchant API certificate: RSA private key plus certificate serial.

    Attributes:
        private_key: Loaded RSA private key.
        serial_no: Certificate serial number, uppercase hex.
    """

    private_key: RSAPrivateKey
    serial_no: str

    def __repr__(self) -> str:
        return f"MerchantCertificate(serial_no={self.serial_no!r})"

    @classmethod
    def from_pem(
        cls,
        cert_pem: bytes | str,
        key_pem: bytes | str,
        password: bytes | None = None,
    ) -> "MerchantCertificate":
        """Load ``apiclient_cert.pem`` and ``apiclient_key.pem`` contents.

        Raises:
            InvalidCredential: If either PEM cannot be parsed, the key is not
                RSA, or the key does not belong to the certificate.
        """
        try:
            cert = x509.load_pem_x509_certificate(_as_bytes(cert_pem))
        except ValueError as e:
            raise InvalidCredential(f"Invalid certificate: {e}") from e

        try:
            key = serialization.load_pem_private_key(_as_bytes(key_pem), password=password)
        except (ValueError, TypeError) as e:
            raise InvalidCredential(f"Invalid private key: {e}") from e

        if not isinstance(key, RSAPrivateKey):
            raise InvalidCredential("Private key must be an RSA key")
        if cert.public_key().public_numbers() != key.public_key().public_numbers():
            raise InvalidCredential("Private key does not match certificate")

        return cls(private_key=key, serial_no=format(cert.serial_number, "X"))

    @classmethod
    def from_files(
        cls,
        cert_path: str | Path,
        key_path: str | Path,
        password: bytes | None = None,
    ) -> "MerchantCertificate":
        """Read and load the certificate and key PEM files."""
        return cls.from_pem(
            Path(cert_path).read_bytes(),
            Path(key_path).read_bytes(),
            password=password,
        )


@dataclass(frozen=True)
class LegacySigning:
    """Symmetric signing with the merchant's shared secret."""

    secret: str

    def __repr__(self) -> str:
        return "LegacySigning(secret=***)"


@dataclass(frozen=True)
class ModernSigning:
    """Asymmetric RSA-SHA256 signing with the merchant certificate."""

    certificate: MerchantCertificate


SigningMode = Union[LegacySigning, ModernSigning]


@dataclass(frozen=True)
class Credential:
    """Merchant identity and key material."""

    merchant_id: str
    shared_secret: str = ""
    certificate: Optional[MerchantCertificate] = None

    def __repr__(self) -> str:
        return (
            f"Credential(merchant_id={self.merchant_id!r}, "
            f"shared_secret={'***' if self.shared_secret else ''!r}, "
            f"certificate={self.certificate!r})"
        )

    def legacy(self) -> LegacySigning:
        """Return the legacy signing mode for this credential."""
        if not self.shared_secret:
            raise MissingCredential("shared secret")
        return LegacySigning(self.shared_secret)

    def modern(self) -> ModernSigning:
        """Return the modern signing mode for this credential."""
        if self.certificate is None:
            raise MissingCredential("certificate")
        return ModernSigning(self.certificate)
