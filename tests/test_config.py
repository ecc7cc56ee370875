"""
Tests for environment configuration

Covers:
- Settings.from_env defaults and overrides
- validate() errors
- Credential loading from certificate files
- HTTP client construction
- WxPayClient.from_settings
"""
import httpx
import pytest

from wxpay_lite.config import DEFAULT_GATEWAY_URL, Settings
from wxpay_lite.credentials import LegacySigning, ModernSigning
from wxpay_lite.exceptions import InvalidCredential
from wxpay_lite.services import WxPayClient

ENV_VARS = [
    "WXPAY_MCH_ID",
    "WXPAY_API_KEY",
    "WXPAY_CERT_PATH",
    "WXPAY_KEY_PATH",
    "WXPAY_BASE_URL",
    "WXPAY_TIMEOUT",
    "WXPAY_DEBUG",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
    "LOG_RETENTION_DAYS",
]


@pytest.fixture
def env(monkeypatch):
    """Clean environment with a merchant id and key set"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WXPAY_MCH_ID", "1900009191")
    monkeypatch.setenv("WXPAY_API_KEY", "K")
    return monkeypatch


@pytest.fixture
def cert_env(env, cert_files):
    cert_path, key_path = cert_files
    env.setenv("WXPAY_CERT_PATH", str(cert_path))
    env.setenv("WXPAY_KEY_PATH", str(key_path))
    return env


class TestFromEnv:
    """Test loading settings from environment variables"""

    def test_defaults(self, env):
        settings = Settings.from_env()
        assert settings.mch_id == "1900009191"
        assert settings.api_key == "K"
        assert settings.cert_path is None
        assert settings.base_url == DEFAULT_GATEWAY_URL
        assert settings.timeout == 30.0
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file is None
        assert settings.log_retention_days == 30

    def test_debug_lowers_log_level(self, env):
        env.setenv("WXPAY_DEBUG", "true")
        settings = Settings.from_env()
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_overrides(self, env):
        env.setenv("WXPAY_BASE_URL", "https://api2.mch.weixin.qq.com")
        env.setenv("WXPAY_TIMEOUT", "5")
        env.setenv("LOG_FORMAT", "console")
        settings = Settings.from_env()
        assert settings.base_url == "https://api2.mch.weixin.qq.com"
        assert settings.timeout == 5.0
        assert settings.log_format == "console"


class TestValidate:
    """Test configuration validation"""

    def test_valid(self, env):
        Settings.from_env().validate()

    def test_missing_mch_id(self, env):
        env.delenv("WXPAY_MCH_ID")
        with pytest.raises(ValueError, match="WXPAY_MCH_ID"):
            Settings.from_env().validate()

    def test_missing_credentials(self, env):
        env.delenv("WXPAY_API_KEY")
        with pytest.raises(ValueError, match="Credentials required"):
            Settings.from_env().validate()

    def test_certificate_without_key(self, env, cert_files):
        env.setenv("WXPAY_CERT_PATH", str(cert_files[0]))
        with pytest.raises(ValueError, match="together"):
            Settings.from_env().validate()

    def test_certificate_file_missing(self, env, tmp_path):
        env.setenv("WXPAY_CERT_PATH", str(tmp_path / "missing_cert.pem"))
        env.setenv("WXPAY_KEY_PATH", str(tmp_path / "missing_key.pem"))
        with pytest.raises(ValueError, match="not found"):
            Settings.from_env().validate()

    def test_non_positive_timeout(self, env):
        env.setenv("WXPAY_TIMEOUT", "0")
        with pytest.raises(ValueError, match="WXPAY_TIMEOUT"):
            Settings.from_env().validate()


class TestLoadCredential:
    """Test key material loading"""

    def test_secret_only(self, env):
        credential = Settings.from_env().load_credential()
        assert credential.merchant_id == "1900009191"
        assert credential.shared_secret == "K"
        assert credential.certificate is None

    def test_with_certificate(self, cert_env):
        credential = Settings.from_env().load_credential()
        assert credential.certificate.serial_no == "1A2B3C"

    def test_broken_certificate(self, cert_env, cert_files):
        cert_files[0].write_text("garbage")
        with pytest.raises(InvalidCredential):
            Settings.from_env().load_credential()


class TestBuildClient:
    """Test HTTP client and WxPayClient construction"""

    @pytest.mark.asyncio
    async def test_plain_http_client(self, env):
        client = Settings.from_env().build_http_client()
        assert isinstance(client, httpx.AsyncClient)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_http_client_with_certificate(self, cert_env):
        client = Settings.from_env().build_http_client()
        assert isinstance(client, httpx.AsyncClient)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_from_settings_legacy(self, env):
        async with WxPayClient.from_settings(Settings.from_env()) as client:
            assert client.mch_id == "1900009191"
            assert client.mode == LegacySigning("K")
            assert client.base_url == DEFAULT_GATEWAY_URL

    @pytest.mark.asyncio
    async def test_from_settings_modern(self, cert_env):
        async with WxPayClient.from_settings(Settings.from_env(), modern=True) as client:
            assert isinstance(client.mode, ModernSigning)
            assert client.mode.certificate.serial_no == "1A2B3C"
