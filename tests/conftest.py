"""
Pytest configuration for wxpay-lite tests

Configures:
- pytest-asyncio for async tests
- Merchant key material (self-signed RSA certificate with a known serial)
- Deterministic nonce and clock sources
- Logging reset between tests that configure it
"""
import datetime
import logging

import pytest
import structlog
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from wxpay_lite.credentials import MerchantCertificate


# Configure pytest-asyncio to auto-detect async tests
pytest_plugins = ('pytest_asyncio',)

MCH_ID = "1900009191"
API_KEY = "K"
SERIAL_NO = "1A2B3C"
FIXED_NONCE = "593BEC0C930BF1AFEB40B4A08C8FB242"
FIXED_TIME = 1554208460


def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


def _self_signed(key, serial: int) -> x509.Certificate:
    name = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, "wxpay-lite test merchant"),
    ])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(serial)
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(key, hashes.SHA256())
    )


# ============== Key material ==============

@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def key_pem(rsa_key) -> bytes:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def cert_pem(rsa_key) -> bytes:
    cert = _self_signed(rsa_key, int(SERIAL_NO, 16))
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def certificate(cert_pem, key_pem) -> MerchantCertificate:
    return MerchantCertificate.from_pem(cert_pem, key_pem)


@pytest.fixture(scope="session")
def public_key(rsa_key):
    return rsa_key.public_key()


@pytest.fixture
def cert_files(tmp_path, cert_pem, key_pem):
    """apiclient_cert.pem / apiclient_key.pem written to a temp dir"""
    cert_path = tmp_path / "apiclient_cert.pem"
    key_path = tmp_path / "apiclient_key.pem"
    cert_path.write_bytes(cert_pem)
    key_path.write_bytes(key_pem)
    return cert_path, key_path


# ============== Deterministic sources ==============

@pytest.fixture
def fixed_nonce():
    def source(length: int = 32) -> str:
        return FIXED_NONCE[:length]
    return source


@pytest.fixture
def fixed_clock():
    return lambda: float(FIXED_TIME)


# ============== Logging ==============

@pytest.fixture
def reset_logging():
    """Restore structlog and root logging after a test configures them"""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
