"""
wxpay-lite - Configuration
Loads merchant settings from environment variables (and a .env file)
"""
from __future__ import annotations

import os
import ssl
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv

from wxpay_lite.credentials import Credential, MerchantCertificate

# Load .env from the current directory, if any
load_dotenv()

DEFAULT_GATEWAY_URL = "https://api.mch.weixin.qq.com"


@dataclass
class Settings:
    """Merchant configuration from environment variables"""

    # Merchant
    mch_id: str
    api_key: str  # shared secret for MD5 / HMAC-SHA256
    cert_path: Optional[str]  # apiclient_cert.pem
    key_path: Optional[str]  # apiclient_key.pem

    # Transport
    base_url: str
    timeout: float
    debug: bool

    # Logging
    log_level: str
    log_format: str
    log_file: Optional[str]
    log_retention_days: int

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables"""
        debug = os.getenv("WXPAY_DEBUG", "false").lower() in ("1", "true")
        return cls(
            mch_id=os.getenv("WXPAY_MCH_ID", ""),
            api_key=os.getenv("WXPAY_API_KEY", ""),
            cert_path=os.getenv("WXPAY_CERT_PATH") or None,
            key_path=os.getenv("WXPAY_KEY_PATH") or None,
            base_url=os.getenv("WXPAY_BASE_URL", DEFAULT_GATEWAY_URL),
            timeout=float(os.getenv("WXPAY_TIMEOUT", "30")),
            debug=debug,
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if debug else "INFO"),
            log_format=os.getenv("LOG_FORMAT", "json"),
            log_file=os.getenv("LOG_FILE") or None,
            log_retention_days=int(os.getenv("LOG_RETENTION_DAYS", "30")),
        )

    @property
    def has_certificate(self) -> bool:
        return bool(self.cert_path and self.key_path)

    def validate(self) -> None:
        """Validate required configuration"""
        if not self.mch_id:
            raise ValueError("WXPAY_MCH_ID is required")
        if not self.api_key and not self.has_certificate:
            raise ValueError(
                "Credentials required: set WXPAY_API_KEY or WXPAY_CERT_PATH and WXPAY_KEY_PATH"
            )
        if bool(self.cert_path) != bool(self.key_path):
            raise ValueError("WXPAY_CERT_PATH and WXPAY_KEY_PATH must be set together")
        for path in (self.cert_path, self.key_path):
            if path and not Path(path).exists():
                raise ValueError(f"Certificate file not found: {path}")
        if self.timeout <= 0:
            raise ValueError("WXPAY_TIMEOUT must be positive")

    def load_credential(self) -> Credential:
        """Read key material. Certificate errors surface here, not at sign time."""
        self.validate()
        certificate = None
        if self.has_certificate:
            certificate = MerchantCertificate.from_files(self.cert_path, self.key_path)
        return Credential(
            merchant_id=self.mch_id,
            shared_secret=self.api_key,
            certificate=certificate,
        )

    def build_http_client(self) -> httpx.AsyncClient:
        """HTTP client presenting the merchant certificate when configured.

        Refund and transfer endpoints reject requests without it.
        """
        if not self.has_certificate:
            return httpx.AsyncClient(timeout=self.timeout)
        context = ssl.create_default_context()
        context.load_cert_chain(certfile=self.cert_path, keyfile=self.key_path)
        return httpx.AsyncClient(timeout=self.timeout, verify=context)
