"""Gateway HTTP services."""

from wxpay_lite.services.base import DEFAULT_TIMEOUT, BaseService
from wxpay_lite.services.client import APPLICATION_JSON, WxPayClient

__all__ = [
    "APPLICATION_JSON",
    "BaseService",
    "DEFAULT_TIMEOUT",
    "WxPayClient",
]
